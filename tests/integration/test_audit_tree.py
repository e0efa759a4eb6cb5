# tests/integration/test_audit_tree.py
import hashlib
import io
import os
import struct
from pathlib import Path

import pytest

pytest.importorskip("magic")  # needs libmagic on the host

from treeaudit.adapters.classifier.libmagic import LibmagicClassifier
from treeaudit.adapters.identity.etc_files import EtcIdentityResolver
from treeaudit.cli.app import LocalFS, MD5Checksum
from treeaudit.services import ReportService, WalkService


def minimal_elf() -> bytes:
    """64-bit little-endian ELF header for an x86-64 executable, padded."""
    ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + b"\x00" * 8
    header = struct.pack(
        "<HHIQQQIHHHHHH",
        2,  # ET_EXEC
        0x3E,  # EM_X86_64
        1,
        0x400000,
        64,
        0,
        0,
        64,
        56,
        1,
        64,
        0,
        0,
    )
    return ident + header + b"\x00" * 256


@pytest.fixture
def walker_and_out(tmp_path: Path):
    passwd = tmp_path / "passwd"
    group = tmp_path / "group"
    passwd.write_text(f"tester:x:{os.getuid()}:{os.getgid()}::/:/bin/sh\n")
    group.write_text(f"testers:x:{os.getgid()}:\n")

    fs = LocalFS()
    reporter = ReportService(
        fs,
        EtcIdentityResolver(passwd_path=passwd, group_path=group),
        LibmagicClassifier(),
        MD5Checksum(),
    )
    out = io.StringIO()
    walker = WalkService(
        fs, reporter, echo=lambda line: out.write(line + "\n"), sort_entries=True
    )
    return walker, out


def test_text_and_binary_files(tmp_path: Path, walker_and_out):
    walker, out = walker_and_out
    root = tmp_path / "data"
    root.mkdir()
    (root / "a.txt").write_bytes(b"hello")
    (root / "b.bin").write_bytes(minimal_elf())

    walker.walk([str(root)])
    lines = out.getvalue().splitlines()
    assert len(lines) == 3

    dir_line, a_line, b_line = lines
    assert dir_line.startswith("d")
    assert dir_line.endswith(f" tester testers {root}")
    assert "md5=" not in dir_line

    assert a_line.endswith(f" 5 tester testers {root / 'a.txt'} md5=5d41402abc4b2a76b9719d911017c592")

    assert b_line.endswith(f" tester testers {root / 'b.bin'}")
    assert "md5=" not in b_line


def test_structured_text_gets_exact_digest(tmp_path: Path, walker_and_out):
    walker, out = walker_and_out
    cfg = tmp_path / "app.conf"
    payload = b"[server]\nport = 8080\nhost = example.org\n"
    cfg.write_bytes(payload)

    walker.walk([str(cfg)])
    assert out.getvalue().strip().endswith(f"md5={hashlib.md5(payload).hexdigest()}")
