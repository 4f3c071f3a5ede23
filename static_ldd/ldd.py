#!/usr/bin/env python3

"""
Static ELF dependency resolver.

Walks DT_NEEDED entries the way the dynamic linker would, without loading
anything: each name is looked up in a fixed, ordered search path and every
library found is scanned in turn.
"""

import os
import stat
from dataclasses import dataclass
from pathlib import Path

import structlog

from static_ldd.elf_reader import ElfInfo, read_elf
from static_ldd.errors import ReadError, ResolveError
from static_ldd.graph import DependencyGraph, LibraryRecord
from static_ldd.search_path import SearchPathConfig, build_search_path

log = structlog.get_logger("static_ldd.ldd")


@dataclass
class Resolution:
    target: str
    info: ElfInfo
    search_path: list
    graph: DependencyGraph

    def dependencies(self):
        return self.graph.dependencies()

    def missing(self):
        return [name for name, path in self.dependencies().items() if not path]


def find_library(name, search_path):
    """Return the first ``<dir>/<name>`` that is a regular file, or None."""
    for base in search_path:
        candidate = os.path.join(base, name)
        try:
            st = os.stat(candidate)
        except (FileNotFoundError, NotADirectoryError):
            continue
        except OSError as e:
            raise ResolveError(f"cannot stat {candidate}: {e}", path=candidate) from e
        if stat.S_ISREG(st.st_mode):
            return candidate
    return None


def _resolve_recursive(path, name, search_path, graph, reader, info=None):
    try:
        needed = (info if info is not None else reader(path)).needed
    except ReadError as e:
        raise ResolveError(f"Failed to resolve {name}: {e}", path=str(path)) from e

    log.debug("scanning", name=name, path=str(path), needed=needed)
    graph.add_node(LibraryRecord(name, str(path)))

    for lib in needed:
        # each name is scanned once, whichever parent saw it first
        if lib not in graph:
            lib_path = find_library(lib, search_path)
            if lib_path is None:
                log.warning("library not found", library=lib, needed_by=name)
                graph.add_node(LibraryRecord(lib))
            else:
                _resolve_recursive(lib_path, lib, search_path, graph, reader)
        graph.add_edge(name, lib)


def resolve(path, name, search_path, graph=None, reader=read_elf, info=None):
    """Resolve ``path`` (known as ``name``) into ``graph`` and return it.

    ``reader`` maps a path to an :class:`ElfInfo`; any :class:`ReadError`
    it raises aborts the whole run as :class:`ResolveError`.
    An already read ``info`` for ``path`` is used instead of reading it again.
    """
    if graph is None:
        graph = DependencyGraph()
    _resolve_recursive(path, name, list(search_path), graph, reader, info)
    return graph


def get_dependencies(binary, config=None, reader=read_elf):
    """Resolve the full dependency graph of ``binary``."""
    config = config or SearchPathConfig()
    bin_path = Path(binary)
    if not bin_path.is_file():
        raise ReadError(f"Binary does not exist: {binary}", path=str(binary))

    info = reader(bin_path)
    search_path = build_search_path(config, str(bin_path), info.word_size)
    log.info("search path built", target=str(bin_path), search_path=search_path)

    graph = resolve(bin_path, bin_path.name, search_path, reader=reader, info=info)
    return Resolution(
        target=str(bin_path),
        info=info,
        search_path=search_path,
        graph=graph,
    )
