"""Errors raised while resolving shared-library dependencies."""


class DependencyError(RuntimeError):
    """Base class for every resolution failure."""

    def __init__(self, message, path=None):
        self.path = path
        super().__init__(message)


class ReadError(DependencyError):
    """A binary is missing, unreadable or not a valid ELF image."""


class ConfigError(DependencyError):
    """An ld.so.conf file (or one of its includes) could not be parsed."""


class ResolveError(DependencyError):
    """A read failure hit somewhere inside the recursive resolution."""
