"""Fold a package's declared dependencies into the workspace root manifest."""

from __future__ import annotations

import logging
from pathlib import Path

from oc_core.manifest import manifest_path, parse_manifest, read_manifest, write_manifest

logger = logging.getLogger(__name__)

# (package.json key, PackageManifest attribute)
DEPENDENCY_FIELDS = (
    ("dependencies", "dependencies"),
    ("devDependencies", "dev_dependencies"),
)


def merge_deps(source_package_dir: Path, root_dir: Path, *, dry_run: bool = False) -> bool:
    """
    Merge dependencies/devDependencies of a template package into root/package.json.

    Source versions win for keys present in both; root-only keys stay. Every
    other root field is left as is. Returns True if the root manifest changed.
    """
    source_path = manifest_path(source_package_dir)
    root_path = manifest_path(root_dir)
    if not source_path.exists():
        logger.info(f"No package.json in {source_package_dir}; skipping dependency merge")
        return False
    if not root_path.exists():
        logger.info(f"No package.json in {root_dir}; skipping dependency merge")
        return False

    source = parse_manifest(source_path, read_manifest(source_path))
    root_data = read_manifest(root_path)
    root = parse_manifest(root_path, root_data)

    changed = False
    for key, attr in DEPENDENCY_FIELDS:
        ours: dict[str, str] = getattr(root, attr)
        theirs: dict[str, str] = getattr(source, attr)
        merged = {**ours, **theirs}
        if merged == ours:
            continue
        root_data[key] = merged
        changed = True

    if not changed:
        logger.info(f"Root dependencies already include {source_package_dir.name}'s")
        return False
    if not dry_run:
        write_manifest(root_path, root_data)
    logger.info(f"Merged dependencies from {source_package_dir.name} into {root_path}")
    return True
