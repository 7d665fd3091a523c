"""package.json reading and atomic writing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from oc_core.errors import ManifestError
from oc_core.models import PackageManifest

MANIFEST_NAME = "package.json"


def manifest_path(package_dir: Path) -> Path:
    return package_dir / MANIFEST_NAME


def read_manifest(path: Path) -> dict[str, Any]:
    """Load a package.json as an ordered dict, raising ManifestError on bad content."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(path, f"invalid JSON ({e.msg}, line {e.lineno})") from e
    if not isinstance(data, dict):
        raise ManifestError(path, "top-level value must be an object")
    return data


def parse_manifest(path: Path, data: dict[str, Any]) -> PackageManifest:
    """Validate the dependency fields of an already loaded manifest."""
    try:
        return PackageManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(path, str(e)) from e


def write_manifest(path: Path, data: dict[str, Any]) -> None:
    """Write a manifest atomically (2-space indent, trailing newline)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.parent / f".{path.name}.octmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    tmp.replace(path)


def set_manifest_name(package_dir: Path, name: str) -> bool:
    """Rewrite the `name` field of package_dir/package.json. Returns False if there is none."""
    path = manifest_path(package_dir)
    if not path.exists():
        return False
    data = read_manifest(path)
    data["name"] = name
    write_manifest(path, data)
    return True
