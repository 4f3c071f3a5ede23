"""Parser for ld.so.conf style library path configuration.

Grammar, one directive per line::

    blank line            ignored
    # comment             ignored
    include <glob>        every matching file is parsed in turn
    <directory>           appended, normalized

Matches of an include glob are processed in sorted order, each one fully
expanded before the next line of the including file.
"""

import glob
import os
import re
from pathlib import Path

import structlog

from static_ldd.errors import ConfigError

log = structlog.get_logger("static_ldd.ld_conf")

DEFAULT_LD_CONF = "/etc/ld.so.conf"
MAX_INCLUDE_DEPTH = 32

_INCLUDE_RE = re.compile(r"^include (.*)$")


def _check_glob(pattern):
    """Reject malformed patterns: unterminated or bad character classes,
    ranges without an upper end, and a trailing lone backslash."""
    if (len(pattern) - len(pattern.rstrip("\\"))) % 2:
        raise ConfigError(f"trailing backslash in pattern: {pattern!r}")

    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] != "[":
            i += 1
            continue
        j = i + 1
        if j < n and pattern[j] == "!":
            j += 1
        first = True
        while True:
            if j >= n or pattern[j] == "/":
                raise ConfigError(f"syntax error in pattern: {pattern!r}")
            # a leading ']' belongs to the class
            if pattern[j] == "]" and not first:
                break
            if pattern[j] == "-":
                raise ConfigError(f"bad range in pattern: {pattern!r}")
            j += 1
            if j < n and pattern[j] == "-":
                if j + 1 >= n or pattern[j + 1] in "]/":
                    raise ConfigError(f"bad range in pattern: {pattern!r}")
                j += 2
            first = False
        i = j + 1


def expand_include(pattern):
    _check_glob(pattern)
    # sorted per path component, so "a/y" comes before "a-b/x"
    return sorted(glob.glob(pattern), key=lambda p: p.split(os.sep))


def parse_ld_conf(path, _depth=0):
    """Return the ordered list of directories named by ``path``.

    Any failure anywhere in the include tree raises :class:`ConfigError`.
    """
    if _depth > MAX_INCLUDE_DEPTH:
        raise ConfigError(
            f"include depth exceeds {MAX_INCLUDE_DEPTH} at {path}", path=str(path)
        )

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read {path}: {e}", path=str(path)) from e

    dirs = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        match = _INCLUDE_RE.match(line)
        if match:
            try:
                included = expand_include(match.group(1))
            except ConfigError as e:
                raise ConfigError(f"{path}: {e}", path=str(path)) from e
            log.debug("include expanded", conf=str(path), pattern=match.group(1), files=included)
            for inc in included:
                dirs.extend(parse_ld_conf(inc, _depth + 1))
            continue

        directory = os.path.normpath(stripped)
        # normpath keeps a leading "//"
        if directory.startswith("//"):
            directory = "/" + directory.lstrip("/")
        dirs.append(directory)

    return dirs
