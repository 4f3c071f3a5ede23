"""Compose the ordered library search path; earlier entries win."""

import os
from dataclasses import dataclass

import structlog

from static_ldd.errors import ConfigError
from static_ldd.ld_conf import DEFAULT_LD_CONF, parse_ld_conf

log = structlog.get_logger("static_ldd.search_path")

DEFAULT_LIB_DIRS = ("/lib", "/usr/lib")
LIB64_DIR = "/lib64"


@dataclass
class SearchPathConfig:
    """Colon-separated path lists; an empty string means unset."""

    override_path: str = ""
    prepend_path: str = ""
    append_path: str = ""
    ld_conf: str = DEFAULT_LD_CONF


def split_path(value: str) -> list[str]:
    return value.split(":") if value else []


def build_search_path(config: SearchPathConfig, target: str, word_size: int) -> list[str]:
    # an override replaces everything else
    if config.override_path:
        return split_path(config.override_path)

    paths = split_path(config.prepend_path)
    paths.append(os.path.dirname(target) or ".")
    if word_size == 64:
        paths.append(LIB64_DIR)
    paths.extend(DEFAULT_LIB_DIRS)
    paths.extend(split_path(config.append_path))

    if config.ld_conf:
        try:
            paths.extend(parse_ld_conf(config.ld_conf))
        except ConfigError as e:
            log.warning("parsing ld config failed", ld_conf=config.ld_conf, error=str(e))

    return paths
