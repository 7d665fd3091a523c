#!/usr/bin/env python3
"""
Regenerate registry.json from the template tree.

Usage:
  python scripts/build_registry.py            # bundled data (or $OC_DATA_DIR)
  python scripts/build_registry.py DATA_DIR   # DATA_DIR/template -> DATA_DIR/registry.json
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console

from oc_core.config import data_dir
from oc_core.registry import build_registry, save_registry

console = Console()


def build(base: Path) -> Path:
    template = base / "template"
    if not template.is_dir():
        console.print(f"[red]Error: template directory not found at {template}[/red]")
        raise SystemExit(2)

    console.print(f"[blue]Building registry.json from {template}...[/blue]")
    registry = build_registry(template, base)
    console.print(f"Found {len(registry.template.files)} root template files.")
    console.print(f"Found {len(registry.apps)} apps.")
    console.print(f"Found {len(registry.packages)} packages.")

    path = save_registry(registry, base / "registry.json")
    console.print(f"[green]\n[OK] Registry generated at {path}[/green]")
    return path


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s - %(message)s")
    if len(sys.argv) > 2:
        print("Usage: python scripts/build_registry.py [DATA_DIR]")
        sys.exit(2)
    base = Path(sys.argv[1]).expanduser().resolve() if len(sys.argv) == 2 else data_dir()
    build(base)
