# File: tests/conftest.py

import errno
import os
import sys

import pytest

# 1. Add project root to path
sys.path.append(os.getcwd())

from codesize.features.walker.data.posix_ops import PosixOps


class CountingOps(PosixOps):
    """
    PosixOps test double that records every descriptor it hands out and
    every close, and can inject failures for chosen entry names.
    """

    def __init__(self, fail_fstat_on=None, fail_list_on=None):
        self.opened = []
        self.closed = []
        self.names = {}
        self.fail_fstat_on = fail_fstat_on
        self.fail_list_on = fail_list_on

    def open(self, path, flags, dir_fd=None):
        fd = super().open(path, flags, dir_fd=dir_fd)
        self.opened.append(fd)
        self.names[fd] = os.path.basename(path)
        return fd

    def close(self, fd):
        self.closed.append(fd)
        super().close(fd)

    def fstat(self, fd):
        if self.names.get(fd) == self.fail_fstat_on:
            raise OSError(errno.EIO, "Injected fstat failure")
        return super().fstat(fd)

    def list_names(self, fd):
        if self.names.get(fd) == self.fail_list_on:
            raise OSError(errno.EIO, "Injected readdir failure")
        return super().list_names(fd)

    @property
    def leaked(self):
        return sorted(set(self.opened) - set(self.closed))


@pytest.fixture
def counting_ops():
    return CountingOps()


@pytest.fixture
def source_tree(tmp_path):
    """
    Creates a small nested project:
    - main.py   (2 lines, 4 bytes)
    - util.py   (1 line, 2 bytes)
    - README    (no newline, 5 bytes, no extension)
    - notes.txt (3 lines, 6 bytes)
    - src/lib.rs        (3 lines, 5 bytes)
    - src/deep/mod.rs   (1 line, 1 byte)
    - empty/            (no files)
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "main.py").write_bytes(b"a\nb\n")
    (root / "util.py").write_bytes(b"x\n")
    (root / "README").write_bytes(b"hello")
    (root / "notes.txt").write_bytes(b"a\nb\nc\n")

    src = root / "src"
    (src / "deep").mkdir(parents=True)
    (src / "lib.rs").write_bytes(b"fn\n\n\n")
    (src / "deep" / "mod.rs").write_bytes(b"\n")

    (root / "empty").mkdir()
    return root


@pytest.fixture
def counting_ops_factory():
    return CountingOps
