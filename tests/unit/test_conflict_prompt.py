import io
from pathlib import Path

from rich.console import Console

from oc_sync import conflict
from oc_sync.conflict import RichConflictPrompt, render_side_by_side
from oc_sync.decision import ConflictDecision

from tests.framework import write_file


def _prompt() -> tuple[RichConflictPrompt, io.StringIO]:
    buf = io.StringIO()
    return RichConflictPrompt(Console(file=buf, width=120)), buf


def test_menu_numbers_map_to_decisions(tmp_path: Path, monkeypatch):
    write_file(tmp_path / "src.txt", "template line\n")
    write_file(tmp_path / "dst.txt", "local line\n")
    prompt, buf = _prompt()

    monkeypatch.setattr(conflict.Prompt, "ask", classmethod(lambda cls, *a, **k: "3"))
    decision = prompt.ask("docs/x.txt", tmp_path / "src.txt", tmp_path / "dst.txt")

    assert decision is ConflictDecision.OVERWRITE_ALL
    out = buf.getvalue()
    assert "docs/x.txt" in out
    assert "local line" in out and "template line" in out


def test_cancelled_prompt_returns_none(tmp_path: Path, monkeypatch):
    prompt, _ = _prompt()

    def _cancel(cls, *a, **k):
        raise KeyboardInterrupt

    monkeypatch.setattr(conflict.Prompt, "ask", classmethod(_cancel))
    assert prompt.ask("x.txt") is None


def test_binary_files_have_no_preview(tmp_path: Path, monkeypatch):
    (tmp_path / "a.bin").write_bytes(b"\xff\xfe\x00")
    (tmp_path / "b.bin").write_bytes(b"\xff\x00\x00")
    prompt, buf = _prompt()
    monkeypatch.setattr(conflict.Prompt, "ask", classmethod(lambda cls, *a, **k: "2"))

    assert prompt.ask("a.bin", tmp_path / "a.bin", tmp_path / "b.bin") is ConflictDecision.SKIP
    assert "no preview" in buf.getvalue()


def test_side_by_side_only_lists_changed_lines():
    table = render_side_by_side("same\nold\n", "same\nnew\n")
    assert table.row_count == 1
