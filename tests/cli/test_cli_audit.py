# tests/cli/test_cli_audit.py
import os
from pathlib import Path

from typer.testing import CliRunner

import treeaudit.cli.app as cli
from treeaudit.cli.app import app
from treeaudit.domain import ContentKind, FatalInitError

runner = CliRunner()


class FakeClassifier:
    """Stands in for libmagic: files starting with the ELF magic are binary."""

    instances: list = []

    def __init__(self, binary_types=None, magic_file=None):
        self.binary_types = set(binary_types or ())
        self.magic_file = magic_file
        FakeClassifier.instances.append(self)

    def mime_type(self, path: str) -> str:
        with open(path, "rb") as fh:
            return "application/x-executable" if fh.read(4) == b"\x7fELF" else "text/plain"

    def classify(self, path: str) -> ContentKind:
        if self.mime_type(path) in self.binary_types:
            return ContentKind.BINARY
        return ContentKind.TEXTUAL


def _dbs(tmp_path: Path) -> list[str]:
    passwd = tmp_path / "passwd"
    group = tmp_path / "group"
    passwd.write_text(f"tester:x:{os.getuid()}:{os.getgid()}::/:/bin/sh\n")
    group.write_text(f"testers:x:{os.getgid()}:\n")
    return ["--passwd", str(passwd), "--group", str(group)]


def test_audit_prints_one_line_per_entry(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(cli, "LibmagicClassifier", FakeClassifier)
    root = tmp_path / "data"
    root.mkdir()
    (root / "a.txt").write_text("hello")
    (root / "b.bin").write_bytes(b"\x7fELF" + b"\x00" * 12)

    r = runner.invoke(app, [str(root), "--sort", *_dbs(tmp_path)])
    assert r.exit_code == 0, r.output

    lines = r.stdout.splitlines()
    assert len(lines) == 3
    assert lines[0].endswith(f" tester testers {root}")
    assert lines[1].endswith(f"{root / 'a.txt'} md5=5d41402abc4b2a76b9719d911017c592")
    assert lines[2].endswith(f" tester testers {root / 'b.bin'}")


def test_missing_root_does_not_stop_the_run(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(cli, "LibmagicClassifier", FakeClassifier)
    f = tmp_path / "a.txt"
    f.write_text("hello")

    r = runner.invoke(app, [str(tmp_path / "nope"), str(f), *_dbs(tmp_path)])
    assert r.exit_code == 0, r.output
    lines = r.stdout.splitlines()
    assert len(lines) == 1
    assert lines[0].endswith(f"{f} md5=5d41402abc4b2a76b9719d911017c592")


def test_binary_type_option_replaces_defaults(tmp_path: Path, monkeypatch):
    FakeClassifier.instances.clear()
    monkeypatch.setattr(cli, "LibmagicClassifier", FakeClassifier)
    f = tmp_path / "a.txt"
    f.write_text("hello")

    r = runner.invoke(
        app, [str(f), "--binary-type", "text/plain", "--quiet", *_dbs(tmp_path)]
    )
    assert r.exit_code == 0, r.output
    assert "md5=" not in r.stdout
    assert FakeClassifier.instances[-1].binary_types == {"text/plain"}


def test_classifier_init_failure_is_fatal(tmp_path: Path, monkeypatch):
    def broken(**kwargs):
        raise FatalInitError("libmagic is not available")

    monkeypatch.setattr(cli, "LibmagicClassifier", broken)
    (tmp_path / "a.txt").write_text("hello")

    r = runner.invoke(app, [str(tmp_path), "--verbose"])
    assert r.exit_code == 2
    assert r.stdout == ""
