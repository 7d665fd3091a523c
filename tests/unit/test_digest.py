from pathlib import Path

from oc_core.digest import compute_digest, file_digest, files_identical

from tests.framework import write_file


def test_compute_digest_is_sha256():
    assert (
        compute_digest(b"")
        == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_file_digest_matches_bytes_digest(tmp_path: Path):
    p = tmp_path / "a.bin"
    p.write_bytes(b"\x00\x01hello")
    assert file_digest(p) == compute_digest(b"\x00\x01hello")


def test_identical_files(tmp_path: Path):
    write_file(tmp_path / "a.txt", "same\n")
    write_file(tmp_path / "b.txt", "same\n")
    assert files_identical(tmp_path / "a.txt", tmp_path / "b.txt")


def test_one_byte_difference(tmp_path: Path):
    (tmp_path / "a.bin").write_bytes(b"abcdef")
    (tmp_path / "b.bin").write_bytes(b"abcdeg")
    assert not files_identical(tmp_path / "a.bin", tmp_path / "b.bin")


def test_read_failure_counts_as_different(tmp_path: Path):
    """A vanished file or a directory must not raise, only report 'different'."""
    write_file(tmp_path / "a.txt", "x")
    assert not files_identical(tmp_path / "a.txt", tmp_path / "missing.txt")
    (tmp_path / "dir").mkdir()
    assert not files_identical(tmp_path / "a.txt", tmp_path / "dir")
