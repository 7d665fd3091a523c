"""oc CLI commands."""

import logging
from pathlib import Path

import dotenv
import typer
from oc_core import OcError, ProjectExistsError, Registry, load_registry
from oc_sync import (
    OverwriteStrategy,
    RichConflictPrompt,
    SyncReport,
    SyncSession,
    Workspace,
    find_project_root,
    init_project,
)
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oc_cli import __version__

dotenv.load_dotenv()

# Initialize
app = typer.Typer(help="oc - scaffold and keep a monorepo in sync with its template")
console = Console()

# Configure logging (default to WARNING, can be lowered in debug mode)
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M",
)
logger = logging.getLogger(__name__)

SYNC_TYPES = ("skill", "package")


def _sanitize_name(name: str) -> str:
    """
    Lightly sanitize a project/app name for file-system friendliness:
      - trim whitespace
      - replace path separators with hyphens
    """
    name = (name or "").strip()
    return name.replace("/", "-").replace("\\", "-")


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.getLogger().setLevel(level)
    for name in ("oc_core", "oc_sync", "oc_cli"):
        logging.getLogger(name).setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"oc {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """oc - scaffold and keep a monorepo in sync with its template."""


def _load_registry_or_exit() -> Registry:
    registry = load_registry()
    if registry is None:
        console.print("[red]Error: Could not load the template registry[/red]")
        raise typer.Exit(2)
    return registry


def _new_session(
    *, non_interactive: bool = False, force: bool = False, dry_run: bool = False
) -> SyncSession:
    if non_interactive and force:
        console.print("[red]Error: --force and --non-interactive are mutually exclusive[/red]")
        raise typer.Exit(2)
    strategy = OverwriteStrategy.ASK
    if force:
        strategy = OverwriteStrategy.OVERWRITE_ALL
    elif non_interactive:
        strategy = OverwriteStrategy.SKIP_ALL
    return SyncSession(
        prompt=RichConflictPrompt(console),
        console=console,
        strategy=strategy,
        dry_run=dry_run,
    )


def get_project_root(root: Path | None) -> Path:
    """Explicit --root, else the nearest project root above cwd, else cwd."""
    if root is not None:
        path = root.expanduser().resolve()
        if not path.is_dir():
            console.print(f"[red]Error: Project root not found at {path}[/red]")
            raise typer.Exit(2)
        return path
    detected = find_project_root(Path.cwd())
    if detected is None:
        logger.info("No project root found above cwd; using cwd")
        return Path.cwd()
    return detected


def _print_summary(report: SyncReport, dry_run: bool) -> None:
    console.rule("[bold]Sync Summary[/bold]" + (" [dim](dry run)[/dim]" if dry_run else ""))
    console.print(
        f"Totals: created: [bold]{len(report.created)}[/bold]   "
        f"overwritten: [bold]{len(report.overwritten)}[/bold]   "
        f"skipped: [bold]{len(report.skipped)}[/bold]   "
        f"unchanged: [bold]{len(report.unchanged)}[/bold]"
    )

    rows = [
        *(("created", p) for p in report.created),
        *(("overwritten", p) for p in report.overwritten),
        *(("skipped", p) for p in report.skipped),
    ]
    if rows:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Action")
        table.add_column("File")
        for action, path in rows:
            table.add_row(action, path)
        console.print(table)
    else:
        console.print("[dim]No changes.[/dim]")

    if report.warnings:
        console.print("[yellow]Warnings:[/yellow]")
        for warning in report.warnings:
            console.print(f"  [!] {warning}")


def _finish(report: SyncReport, action: str) -> None:
    """Print the final status line and exit non-zero on abort or warnings."""
    if report.aborted:
        console.print(f"[yellow][WARN] {action} aborted by user[/yellow]")
        raise typer.Exit(1)
    if report.warnings:
        console.print(f"[yellow][WARN] {action} completed with warnings[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green][OK] {action} completed successfully[/green]")


@app.command()
def init(
    project_name: str = typer.Argument(..., help="Name of the project"),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
):
    """Initialize a new monorepo project from the bundled template."""
    _configure_logging(debug)
    name = _sanitize_name(project_name)
    if not name:
        console.print("[red]Error: Project name must not be empty[/red]")
        raise typer.Exit(2)

    registry = _load_registry_or_exit()
    session = _new_session(force=True)
    try:
        target = init_project(Path.cwd(), name, registry, session)
    except ProjectExistsError as e:
        console.print(f"[red]Error: Directory {name} already exists.[/red]")
        raise typer.Exit(1) from e
    except (OcError, OSError) as e:
        console.print(f"[red]Failed to initialize project:[/red] {escape(str(e))}")
        logger.exception("Init failed")
        raise typer.Exit(2) from e

    for warning in session.report.warnings:
        console.print(f"  [!] {warning}")
    console.print(f"[green][OK] Project {name} initialized successfully![/green]")
    console.print(f"  Root: {target}")
    console.print(f"\n[blue]cd {name}\nbun install[/blue]\n")


@app.command()
def add(
    kind: str = typer.Argument(..., metavar="TYPE", help="Type of resource (app or package)"),
    template_name: str = typer.Argument(..., help="Name of the template (e.g., web)"),
    target_name: str = typer.Argument(..., help="Name of the target folder"),
    root: Path | None = typer.Option(None, "--root", help="Project root (default: auto-detect)"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be done without doing it"
    ),
    non_interactive: bool = typer.Option(
        False, "--non-interactive", help="Keep local files on conflicts instead of prompting"
    ),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
):
    """Add an app or package to the project from a named template."""
    _configure_logging(debug)
    project_root = get_project_root(root)
    target_name = _sanitize_name(target_name)
    if not target_name:
        console.print("[red]Error: Target name must not be empty[/red]")
        raise typer.Exit(2)
    registry = _load_registry_or_exit()
    session = _new_session(non_interactive=non_interactive, dry_run=dry_run)

    console.print(f"[cyan]Adding {kind} {template_name} as {target_name}...[/cyan]")
    try:
        target = Workspace(project_root, registry, session).add(kind, template_name, target_name)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e
    except ProjectExistsError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except OcError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e
    except OSError as e:
        console.print(f"[red]Failed to add resource:[/red] {escape(str(e))}")
        logger.exception("Add failed")
        raise typer.Exit(2) from e

    _print_summary(session.report, dry_run)
    if target is not None:
        console.print(f"  Target: {target}")
    _finish(session.report, "Add")


@app.command()
def sync(
    kind: str | None = typer.Argument(
        None, metavar="[TYPE]", help="What to sync: skill or package (default: everything)"
    ),
    name: str | None = typer.Argument(None, help="Name of the package (or skill)"),
    root: Path | None = typer.Option(None, "--root", help="Project root (default: auto-detect)"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be done without doing it"
    ),
    non_interactive: bool = typer.Option(
        False, "--non-interactive", help="Keep local files on conflicts instead of prompting"
    ),
    force: bool = typer.Option(
        False, "--force", help="Overwrite every conflicting file without prompting"
    ),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
):
    """Sync shared packages and skills from the template into the project."""
    _configure_logging(debug)
    if kind is not None and kind not in SYNC_TYPES:
        console.print(f"[red]Error: Unknown sync type '{kind}' (expected skill or package)[/red]")
        raise typer.Exit(2)
    if kind == "package" and not name:
        console.print("[red]Error: Package name is required: oc sync package <name>[/red]")
        raise typer.Exit(2)

    session = _new_session(non_interactive=non_interactive, force=force, dry_run=dry_run)
    project_root = get_project_root(root)
    registry = _load_registry_or_exit()
    label = " ".join(part for part in (kind or "everything", name) if part)
    console.print(f"[cyan]Syncing {label} into {project_root}[/cyan]")
    try:
        workspace = Workspace(project_root, registry, session)
        if kind == "skill":
            workspace.sync_skills([name] if name else None)
        elif kind == "package":
            workspace.sync_package(name)
        else:
            workspace.sync_all()
    except OcError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e
    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        logger.exception("Sync failed")
        raise typer.Exit(2) from e

    _print_summary(session.report, dry_run)
    _finish(session.report, "Sync")


if __name__ == "__main__":
    app()
