"""Shared pytest fixtures for static_ldd tests."""

from pathlib import Path

import pytest
import structlog

from static_ldd.elf_reader import ElfInfo
from static_ldd.errors import ReadError


class FakeReader:
    """Serves ElfInfo from a ``{path: needed}`` table and counts reads."""

    def __init__(self, table, word_size=64):
        self.table = {str(k): list(v) for k, v in table.items()}
        self.word_size = word_size
        self.reads = []

    def __call__(self, path):
        path = str(path)
        self.reads.append(path)
        if path not in self.table:
            raise ReadError(f"Not a valid ELF file: {path}", path=path)
        return ElfInfo(path=path, needed=self.table[path], word_size=self.word_size)


@pytest.fixture
def touch():
    def _touch(path: Path):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
        return path

    return _touch


@pytest.fixture
def make_reader():
    return FakeReader


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
