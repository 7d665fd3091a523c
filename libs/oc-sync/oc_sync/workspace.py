"""Project-level operations: init, add and sync."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from oc_core.config import PROJECT_DIR, load_project_config, write_project_config
from oc_core.errors import ManifestError, ProjectExistsError, RegistryError
from oc_core.manifest import MANIFEST_NAME, manifest_path, read_manifest, set_manifest_name
from oc_core.models import ProjectConfig, Registry, RegistryItem
from oc_core.resolver import NotFound, resolve

from oc_sync.decision import SyncSession
from oc_sync.deps import merge_deps
from oc_sync.reconcile import reconcile

logger = logging.getLogger(__name__)

KIND_ALIASES = {
    "app": "app",
    "apps": "app",
    "package": "package",
    "packages": "package",
}


def is_plain_name(name: str) -> bool:
    """True for a single path component that is not empty, "." or ".."."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


def _is_workspace_root(path: Path) -> bool:
    pkg = path / MANIFEST_NAME
    if not pkg.is_file():
        return False
    try:
        data = json.loads(pkg.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    return isinstance(data, dict) and "workspaces" in data


def find_project_root(start: Path) -> Path | None:
    """Nearest directory holding .oc/, else the nearest workspace package.json."""
    start = start.resolve()
    candidates = (start, *start.parents)
    for p in candidates:
        if (p / PROJECT_DIR).is_dir():
            return p
    for p in candidates:
        if _is_workspace_root(p):
            return p
    return None


class Workspace:
    """Sync and add operations against one project root."""

    def __init__(
        self,
        root: Path,
        registry: Registry,
        session: SyncSession,
        config: ProjectConfig | None = None,
        data_dir: Path | None = None,
    ):
        self.root = root
        self.registry = registry
        self.session = session
        self.config = config or load_project_config(root)
        self.data_dir = data_dir

    def _resolve(self, logical_path: str, label: str) -> Path | None:
        found = resolve(logical_path, self.data_dir)
        if isinstance(found, NotFound):
            self.session.warn(f"{label} is unavailable: {found.reason}")
            return None
        return found.path

    def _display(self, *parts: str) -> str:
        return "/".join(p.strip("/") for p in parts if p)

    # ---- skills ------------------------------------------------------------
    def sync_skills(self, names: list[str] | None = None) -> int:
        """Reconcile skill directories (e.g. .claude) from the template root."""
        template = self._resolve(self.registry.template.path, "Template root")
        if template is None:
            return 0

        synced = 0
        for name in names or self.config.skills:
            if self.session.aborted:
                break
            if not is_plain_name(name):
                self.session.warn(f"Invalid skill name '{name}'")
                continue
            source = template / name
            if not source.is_dir():
                self.session.warn(f"Skill '{name}' not found in template")
                continue
            logger.info(f"Syncing skill {name}")
            reconcile(self.session, source, self.root / name, name)
            synced += 1
        return synced

    # ---- packages ----------------------------------------------------------
    def sync_package(self, name: str) -> bool:
        """Reconcile one package's files, then merge its dependencies into the root."""
        item = self.registry.packages.get(name)
        if item is None:
            self.session.warn(f"Package '{name}' not found in registry")
            return False
        source = self._resolve(item.path, f"Package '{name}'")
        if source is None:
            return False

        logger.info(f"Syncing package {name} from {source}")
        target = self.root / self.config.packages_dir / name
        reconcile(self.session, source, target, self._display(self.config.packages_dir, name))
        if self.session.aborted:
            return False
        merge_deps(source, self.root, dry_run=self.session.dry_run)
        return True

    def sync_packages(self, names: list[str] | None = None) -> int:
        synced = 0
        for name in names if names is not None else list(self.registry.packages):
            if self.session.aborted:
                break
            if self.sync_package(name):
                synced += 1
        return synced

    def sync_all(self) -> int:
        """Skills first, then every registry package."""
        synced = self.sync_skills()
        if not self.session.aborted:
            synced += self.sync_packages()
        return synced

    # ---- add ---------------------------------------------------------------
    def _package_name(self, key: str) -> str | None:
        """The `name` a registry package publishes in its template package.json."""
        found = resolve(self.registry.packages[key].path, self.data_dir)
        if isinstance(found, NotFound):
            return None
        path = manifest_path(found.path)
        if not path.is_file():
            return None
        try:
            name = read_manifest(path).get("name")
        except (ManifestError, OSError) as e:
            logger.debug(f"Could not read {path}: {e}")
            return None
        return name if isinstance(name, str) else None

    def _workspace_packages(self, item: RegistryItem) -> list[str]:
        """
        Registry packages an app depends on. A bare `<name>` matches the
        registry key; a scoped `@scope/<name>` matches only when the package's
        own manifest is published under that exact name.
        """
        found: list[str] = []
        for dep in [*item.dependencies, *item.dev_dependencies]:
            if dep.startswith("@"):
                key = dep.rsplit("/", 1)[-1]
                if key not in self.registry.packages or self._package_name(key) != dep:
                    continue
            else:
                key = dep
            if key in self.registry.packages and key not in found:
                found.append(key)
        return found

    def add(self, kind: str, template_name: str, target_name: str) -> Path | None:
        """
        Copy a named app/package template to <apps-dir|packages-dir>/<target_name>.

        Raises:
            ValueError: kind is neither app nor package, or target_name is not a single
                path component
            ProjectExistsError: the target directory already exists
        """
        normalized = KIND_ALIASES.get(kind)
        if normalized is None:
            raise ValueError(f"Unknown type '{kind}' (expected 'app' or 'package')")
        if not is_plain_name(target_name):
            raise ValueError(f"Invalid target name '{target_name}'")

        catalog = self.registry.apps if normalized == "app" else self.registry.packages
        base = self.config.apps_dir if normalized == "app" else self.config.packages_dir
        item = catalog.get(template_name)
        if item is None:
            self.session.warn(f"{normalized.capitalize()} template '{template_name}' not found in registry")
            return None

        target = self.root / base / target_name
        if target.exists():
            raise ProjectExistsError(target)
        source = self._resolve(item.path, f"Template '{template_name}'")
        if source is None:
            return None

        reconcile(self.session, source, target, self._display(base, target_name))
        if self.session.aborted:
            return None
        if not self.session.dry_run:
            set_manifest_name(target, target_name)

        if normalized == "package":
            merge_deps(source, self.root, dry_run=self.session.dry_run)
            return target

        for pkg in self._workspace_packages(item):
            if self.session.aborted:
                break
            if (self.root / self.config.packages_dir / pkg).exists():
                continue
            logger.info(f"{template_name} depends on workspace package {pkg}; syncing it")
            self.sync_package(pkg)
        return target


def init_project(
    parent: Path,
    name: str,
    registry: Registry,
    session: SyncSession,
    data_dir: Path | None = None,
) -> Path:
    """
    Create parent/name from the template root: root files, skills, renamed
    package.json and .oc/config.yaml.
    """
    target = parent / name
    if target.exists():
        raise ProjectExistsError(target)
    template = resolve(registry.template.path, data_dir)
    if isinstance(template, NotFound):
        raise RegistryError(f"Template root unavailable: {template.reason}")

    target.mkdir(parents=True)
    for entry in registry.template.files:
        source = template.path / entry
        if not source.exists():
            session.warn(f"Template file '{entry}' is missing")
            continue
        reconcile(session, source, target / entry, entry)

    config = ProjectConfig(project_name=name)
    Workspace(target, registry, session, config=config, data_dir=data_dir).sync_skills()
    set_manifest_name(target, name)
    write_project_config(target, config)
    return target
