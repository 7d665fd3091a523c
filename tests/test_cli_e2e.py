"""End-to-end CLI tests using a sandbox OC_DATA_DIR and Typer CliRunner."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

import pytest
from typer.testing import CliRunner

from oc_cli import __version__
from oc_cli.cli import app

from tests.framework import make_data_dir, read_file, read_json, write_file

runner = CliRunner()


@pytest.fixture()
def env(tmp_path: Path) -> Dict[str, str]:
    """Sandbox environment pointing OC_DATA_DIR at a small template."""
    data = make_data_dir(tmp_path)
    env = os.environ.copy()
    env["OC_DATA_DIR"] = str(data)
    return env


@pytest.fixture()
def project(env, tmp_path: Path, monkeypatch) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    res = runner.invoke(app, ["init", "shop"], env=env)
    assert res.exit_code == 0, res.output
    return work / "shop"


def test_version():
    res = runner.invoke(app, ["--version"])
    assert res.exit_code == 0
    assert __version__ in res.output


def test_init_creates_project(project: Path):
    assert read_json(project / "package.json")["name"] == "shop"
    assert (project / ".claude" / "settings.json").exists()
    assert (project / ".oc" / "config.yaml").exists()


def test_init_refuses_existing_directory(env, project: Path):
    res = runner.invoke(app, ["init", "shop"], env=env)
    assert res.exit_code == 1
    assert "already exists" in res.output


def test_sync_everything_then_nothing_to_do(env, project: Path):
    res = runner.invoke(app, ["sync", "--root", str(project)], env=env)
    assert res.exit_code == 0, res.output
    assert "Sync Summary" in res.output
    assert (project / "packages" / "ui" / "src" / "index.ts").exists()
    assert read_json(project / "package.json")["dependencies"] == {"picocolors": "^1.1.0"}

    res = runner.invoke(app, ["sync", "--root", str(project)], env=env)
    assert res.exit_code == 0, res.output
    assert "No changes." in res.output


def test_sync_package_from_inside_project(env, project: Path, monkeypatch):
    monkeypatch.chdir(project)
    res = runner.invoke(app, ["sync", "package", "ui"], env=env)
    assert res.exit_code == 0, res.output
    assert (project / "packages" / "ui" / "package.json").exists()
    assert not (project / "packages" / "bare").exists()


def test_conflict_skip_keeps_local(env, project: Path):
    write_file(project / ".claude" / "settings.json", "mine\n")
    res = runner.invoke(app, ["sync", "skill", "--root", str(project)], env=env, input="2\n")
    assert res.exit_code == 0, res.output
    assert "Conflict" in res.output
    assert read_file(project / ".claude" / "settings.json") == "mine\n"


def test_conflict_overwrite(env, project: Path):
    write_file(project / ".claude" / "settings.json", "mine\n")
    res = runner.invoke(app, ["sync", "skill", ".claude", "--root", str(project)], env=env, input="1\n")
    assert res.exit_code == 0, res.output
    assert read_file(project / ".claude" / "settings.json") == '{"permissions": {}}\n'


def test_abort_exits_with_warning(env, project: Path):
    write_file(project / ".claude" / "settings.json", "mine\n")
    res = runner.invoke(app, ["sync", "--root", str(project)], env=env, input="5\n")
    assert res.exit_code == 1, res.output
    assert "aborted" in res.output
    assert read_file(project / ".claude" / "settings.json") == "mine\n"
    assert not (project / "packages").exists()


def test_non_interactive_and_force(env, project: Path):
    write_file(project / ".claude" / "settings.json", "mine\n")

    res = runner.invoke(app, ["sync", "--non-interactive", "--root", str(project)], env=env)
    assert res.exit_code == 0, res.output
    assert read_file(project / ".claude" / "settings.json") == "mine\n"

    res = runner.invoke(app, ["sync", "--force", "--root", str(project)], env=env)
    assert res.exit_code == 0, res.output
    assert read_file(project / ".claude" / "settings.json") == '{"permissions": {}}\n'

    res = runner.invoke(
        app, ["sync", "--force", "--non-interactive", "--root", str(project)], env=env
    )
    assert res.exit_code == 2


def test_dry_run_changes_nothing(env, project: Path):
    res = runner.invoke(app, ["sync", "package", "ui", "--dry-run", "--root", str(project)], env=env)
    assert res.exit_code == 0, res.output
    assert "dry run" in res.output
    assert not (project / "packages").exists()
    assert read_json(project / "package.json")["dependencies"] == {}


def test_sync_argument_errors(env, project: Path):
    res = runner.invoke(app, ["sync", "package", "--root", str(project)], env=env)
    assert res.exit_code == 2
    assert "Package name is required" in res.output

    res = runner.invoke(app, ["sync", "bogus", "--root", str(project)], env=env)
    assert res.exit_code == 2


def test_unknown_package_is_reported(env, project: Path):
    res = runner.invoke(app, ["sync", "package", "ghost", "--root", str(project)], env=env)
    assert res.exit_code == 1
    assert "ghost" in res.output


def test_add_app(env, project: Path):
    res = runner.invoke(app, ["add", "app", "web", "site", "--root", str(project)], env=env)
    assert res.exit_code == 0, res.output
    assert read_json(project / "apps" / "site" / "package.json")["name"] == "site"
    assert (project / "packages" / "ui").is_dir()

    res = runner.invoke(app, ["add", "app", "web", "site", "--root", str(project)], env=env)
    assert res.exit_code == 1

    res = runner.invoke(app, ["add", "widget", "web", "x", "--root", str(project)], env=env)
    assert res.exit_code == 2


def test_missing_registry_is_an_error(tmp_path: Path, monkeypatch):
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.chdir(tmp_path)
    env = os.environ.copy()
    env["OC_DATA_DIR"] = str(empty)
    res = runner.invoke(app, ["init", "demo"], env=env)
    assert res.exit_code == 2
    assert "registry" in res.output
    assert not (tmp_path / "demo").exists()


def test_malformed_project_config_is_reported(env, project: Path):
    write_file(project / ".oc" / "config.yaml", "skills: .claude\n")

    res = runner.invoke(app, ["sync", "--root", str(project)], env=env)
    assert res.exit_code == 2, res.output
    assert isinstance(res.exception, SystemExit)
    assert "Error:" in res.output

    res = runner.invoke(app, ["add", "app", "web", "site", "--root", str(project)], env=env)
    assert res.exit_code == 2, res.output
    assert isinstance(res.exception, SystemExit)
    assert not (project / "apps").exists()


def test_add_rejects_blank_and_dot_target_names(env, project: Path):
    res = runner.invoke(app, ["add", "app", "web", "  ", "--root", str(project)], env=env)
    assert res.exit_code == 2, res.output
    assert "must not be empty" in res.output

    res = runner.invoke(app, ["add", "app", "web", "..", "--root", str(project)], env=env)
    assert res.exit_code == 2, res.output

    assert not (project / "apps").exists()


def test_sync_skill_outside_template_is_refused(env, project: Path):
    res = runner.invoke(app, ["sync", "skill", "../..", "--root", str(project)], env=env)
    assert res.exit_code == 1, res.output
    assert "Invalid skill name" in res.output
