"""Template registry.

registry.json lists the bundled template root plus every app and package
template, so commands can look templates up by name without scanning disk.
It is produced by `build_registry` (see scripts/build_registry.py) and is
read-only for init/add/sync.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from oc_core.config import registry_path, registry_url
from oc_core.manifest import MANIFEST_NAME
from oc_core.models import ItemKind, Registry, RegistryItem, TemplateRoot

logger = logging.getLogger(__name__)

# Template root subdirectories that hold named templates rather than root files.
NAMED_DIRS = ("apps", "packages")


def load_registry(path: Path | None = None) -> Registry | None:
    """Load the local registry, falling back to the remote one. None if neither works."""
    path = path or registry_path()
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                return Registry.model_validate(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Found local registry at {path} but failed to parse it: {e}")
    return fetch_remote_registry()


def fetch_remote_registry() -> Registry | None:
    """Remote registries are not supported; report and return None."""
    logger.warning(f"Failed to load registry from remote ({registry_url()}/registry.json)")
    return None


def save_registry(registry: Registry, path: Path | None = None) -> Path:
    path = path or registry_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.octmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(registry.model_dump(by_alias=True), f, indent=2)
        f.write("\n")
    tmp.replace(path)
    return path


def _package_info(dir_path: Path) -> dict[str, Any]:
    pkg_path = dir_path / MANIFEST_NAME
    if not pkg_path.exists():
        return {}
    try:
        with open(pkg_path, encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read package.json in {dir_path}: {e}")
        return {}


def _scan_directory(base_dir: Path, kind: ItemKind, rel_base: Path) -> dict[str, RegistryItem]:
    items: dict[str, RegistryItem] = {}
    if not base_dir.is_dir():
        return items

    for entry in sorted(base_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_dir() or entry.name.startswith("."):
            continue
        info = _package_info(entry)
        items[entry.name] = RegistryItem(
            name=entry.name,
            path=entry.relative_to(rel_base).as_posix(),
            description=info.get("description") or "",
            kind=kind,
            dependencies=list(info.get("dependencies") or {}),
            dev_dependencies=list(info.get("devDependencies") or {}),
        )
    return items


def _scan_template_root(template_dir: Path, rel_base: Path) -> TemplateRoot:
    logical = template_dir.relative_to(rel_base).as_posix()
    if not template_dir.is_dir():
        return TemplateRoot(path=logical, files=[])

    files = []
    for entry in template_dir.iterdir():
        if entry.name.startswith("."):
            continue
        if entry.is_dir() and entry.name in NAMED_DIRS:
            continue
        files.append(entry.name)
    return TemplateRoot(path=logical, files=sorted(files))


def build_registry(template_dir: Path, base_dir: Path | None = None) -> Registry:
    """
    Scan a template tree into a Registry.

    Args:
        template_dir: Template root (contains apps/, packages/ and root files)
        base_dir: Directory logical paths are made relative to; defaults to
            the template's parent, where registry.json is written.
    """
    template_dir = template_dir.resolve()
    rel_base = (base_dir or template_dir.parent).resolve()

    root = _scan_template_root(template_dir, rel_base)
    logger.info(f"Found {len(root.files)} root template files")
    apps = _scan_directory(template_dir / "apps", "app", rel_base)
    logger.info(f"Found {len(apps)} apps")
    packages = _scan_directory(template_dir / "packages", "package", rel_base)
    logger.info(f"Found {len(packages)} packages")

    return Registry(template=root, apps=apps, packages=packages)
