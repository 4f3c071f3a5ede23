"""Read DT_NEEDED entries and the word size of an ELF image."""

from dataclasses import dataclass, field
from pathlib import Path

from elftools.common.exceptions import ELFError
from elftools.elf.descriptions import describe_ei_class
from elftools.elf.dynamic import DynamicSection
from elftools.elf.elffile import ELFFile

from static_ldd.errors import ReadError


@dataclass(frozen=True)
class ElfInfo:
    path: str
    needed: list = field(default_factory=list)
    word_size: int = 64
    elf_class: str = "ELF64"
    machine: str = ""


def _needed_libraries(elf):
    needed = []
    for sec in elf.iter_sections():
        if not isinstance(sec, DynamicSection):
            continue
        for tag in sec.iter_tags():
            if tag.entry.d_tag == "DT_NEEDED":
                needed.append(tag.needed)
    return needed


def read_elf(path) -> ElfInfo:
    """Open ``path`` as an ELF file and return its imports and class.

    The file handle is closed before returning, on success or failure.
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            elf = ELFFile(f)
            return ElfInfo(
                path=str(path),
                needed=_needed_libraries(elf),
                word_size=elf.elfclass,
                elf_class=describe_ei_class(elf.header["e_ident"]["EI_CLASS"]),
                machine=elf.get_machine_arch(),
            )
    except OSError as e:
        raise ReadError(f"Failed to open ELF file: {path} ({e})", path=str(path)) from e
    except ELFError as e:
        raise ReadError(f"Not a valid ELF file: {path} ({e})", path=str(path)) from e


def read_imports(path):
    """Return ``(needed, word_size)`` for the binary at ``path``."""
    info = read_elf(path)
    return info.needed, info.word_size
