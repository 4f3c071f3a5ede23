"""Static resolver for the shared-library dependencies of ELF binaries."""

__version__ = "0.1.0"

from static_ldd.elf_reader import ElfInfo, read_elf, read_imports
from static_ldd.errors import ConfigError, DependencyError, ReadError, ResolveError
from static_ldd.graph import DependencyGraph, LibraryRecord
from static_ldd.ld_conf import parse_ld_conf
from static_ldd.ldd import Resolution, find_library, get_dependencies, resolve
from static_ldd.search_path import SearchPathConfig, build_search_path

__all__ = [
    "ConfigError",
    "DependencyError",
    "DependencyGraph",
    "ElfInfo",
    "LibraryRecord",
    "ReadError",
    "Resolution",
    "ResolveError",
    "SearchPathConfig",
    "build_search_path",
    "find_library",
    "get_dependencies",
    "parse_ld_conf",
    "read_elf",
    "read_imports",
    "resolve",
]
