"""Copy a binary and its resolved libraries into one directory."""

import shutil
from pathlib import Path

import structlog

log = structlog.get_logger("static_ldd.export")


def export_dependencies(resolution, dest):
    """Copy every resolved entry to ``dest/<name>``; return written paths.

    Unresolved libraries are skipped with a warning. Copy failures raise.
    """
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)

    written = []
    for name, path in resolution.dependencies().items():
        if not path:
            log.warning("file not found for library, skipping", library=name)
            continue
        out = dest / name
        print(f"Copy {name}: {path} => {dest}")
        shutil.copy2(path, out)
        written.append(out)
    return written
