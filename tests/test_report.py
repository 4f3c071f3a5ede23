"""Tests for text/JSON reports and the export step."""

import json
from pathlib import Path

import pytest

from static_ldd import report
from static_ldd.elf_reader import ElfInfo
from static_ldd.export import export_dependencies
from static_ldd.graph import DependencyGraph, LibraryRecord
from static_ldd.ldd import Resolution


@pytest.fixture
def resolution(tmp_path: Path):
    app = tmp_path / "bin" / "app"
    libfoo = tmp_path / "lib" / "libfoo.so"
    for p, data in ((app, b"\x7fELFapp"), (libfoo, b"\x7fELFfoo")):
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    app.chmod(0o755)

    g = DependencyGraph()
    g.add_node(LibraryRecord("app", str(app)))
    g.add_node(LibraryRecord("libfoo.so", str(libfoo)))
    g.add_node(LibraryRecord("libbar.so"))
    g.add_edge("app", "libfoo.so")
    g.add_edge("libfoo.so", "libbar.so")
    return Resolution(
        target=str(app),
        info=ElfInfo(path=str(app), needed=["libfoo.so"], word_size=64, elf_class="ELF64", machine="x64"),
        search_path=[str(tmp_path / "lib"), "/lib64"],
        graph=g,
    )


class TestText:
    def test_search_path(self):
        assert report.format_search_path(["/a", "/b"]) == "Path lookup order:\n/a\n/b\n"

    def test_listing(self, resolution):
        lines = report.format_listing(resolution).splitlines()
        assert lines[0] == f"Target: {resolution.target}, Class: ELF64"
        assert lines[1:] == [
            f"  app => {resolution.target}",
            f"  libfoo.so => {resolution.graph['libfoo.so'].path}",
            "  libbar.so => ",
        ]

    def test_tree(self, resolution):
        assert report.format_tree(resolution.graph) == "-app\n  |-libfoo.so\n  |  |-libbar.so"


class TestJson:
    def test_document(self, resolution, tmp_path: Path):
        out = tmp_path / "report.json"
        report.write_json(resolution, out)

        doc = json.loads(out.read_text())
        assert doc["target"] == resolution.target
        assert doc["class"] == "ELF64"
        assert doc["missing"] == ["libbar.so"]
        assert doc["edges"] == [["app", "libfoo.so"], ["libfoo.so", "libbar.so"]]
        assert doc["dependencies"]["libbar.so"] == ""


class TestExport:
    def test_copies_resolved_entries(self, resolution, tmp_path: Path):
        dest = tmp_path / "out" / "bundle"

        written = export_dependencies(resolution, dest)

        assert written == [dest / "app", dest / "libfoo.so"]
        assert (dest / "libfoo.so").read_bytes() == b"\x7fELFfoo"
        assert (dest / "app").stat().st_mode & 0o777 == 0o755
        assert not (dest / "libbar.so").exists()

    def test_existing_destination(self, resolution, tmp_path: Path):
        dest = tmp_path / "bundle"
        dest.mkdir()
        assert len(export_dependencies(resolution, dest)) == 2

    def test_vanished_source_raises(self, resolution, tmp_path: Path):
        Path(resolution.graph["libfoo.so"].path).unlink()
        with pytest.raises(OSError):
            export_dependencies(resolution, tmp_path / "bundle")
