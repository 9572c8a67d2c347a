"""Exceptions raised by memline."""


class MemlineError(Exception):
    """Base class for memline errors."""


class MemoryUnavailableError(MemlineError):
    """The platform has no supported way to read memory counters."""


class MemoryReadError(MemlineError):
    """Memory counters could not all be read."""


class ConfigError(MemlineError, ValueError):
    """Invalid memory module configuration."""
