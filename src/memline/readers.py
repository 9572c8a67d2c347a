"""Platform memory readers for memline."""

import logging
import re
import sys
from abc import ABC, abstractmethod

import psutil

from memline.errors import MemoryReadError, MemoryUnavailableError
from memline.models import MemorySnapshot

logger = logging.getLogger(__name__)

MEMINFO_PATH = "/proc/meminfo"

# /proc/meminfo label -> MemorySnapshot field
MEMINFO_FIELDS = {
    "MemTotal:": "total",
    "MemFree:": "free",
    "MemAvailable:": "available",
    "Buffers:": "buffers",
    "Cached:": "cached",
    "Shmem:": "shared",
}

_LEADING_NUMBER = re.compile(r"\s*\+?(\d*)", re.ASCII)


def _parse_kibibytes(text: str) -> int:
    """Parse the leading decimal number of a meminfo value, in bytes."""
    digits = _LEADING_NUMBER.match(text).group(1)
    return int(digits or 0) * 1024


class MemoryReader(ABC):
    """Source of memory counters for the current host."""

    @abstractmethod
    def read(self) -> MemorySnapshot:
        """
        Read a fresh snapshot.

        Raises:
            MemoryReadError: If the counters could not all be obtained.
        """


class ProcMeminfoReader(MemoryReader):
    """Reads memory counters from Linux /proc/meminfo."""

    def __init__(self, path: str = MEMINFO_PATH) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def read(self) -> MemorySnapshot:
        values: dict[str, int] = {}
        try:
            with open(self._path, encoding="ascii", errors="replace") as meminfo:
                for line in meminfo:
                    for label, field in MEMINFO_FIELDS.items():
                        if line.startswith(label):
                            values[field] = _parse_kibibytes(line[len(label):])
                            break
                    else:
                        continue
                    # Stop as soon as every counter has been seen
                    if len(values) == len(MEMINFO_FIELDS):
                        break
        except OSError as exc:
            raise MemoryReadError(f"cannot read {self._path}: {exc}") from exc

        missing = set(MEMINFO_FIELDS.values()) - values.keys()
        if missing:
            raise MemoryReadError(
                f"{self._path} is missing fields: {', '.join(sorted(missing))}"
            )
        return MemorySnapshot(**values)


class PsutilMemoryReader(MemoryReader):
    """
    Reads memory counters through psutil.

    Used on FreeBSD, where only physical memory and the free page count are
    available. The remaining counters are reported as zero.
    """

    def read(self) -> MemorySnapshot:
        try:
            mem = psutil.virtual_memory()
        except (OSError, psutil.Error) as exc:
            raise MemoryReadError(f"cannot query memory counters: {exc}") from exc

        return MemorySnapshot(
            total=mem.total,
            free=mem.free,
            available=0,
            buffers=0,
            cached=0,
            shared=0,
        )


def select_reader(platform: str | None = None) -> MemoryReader:
    """
    Pick the memory reader for a platform.

    Args:
        platform: A ``sys.platform`` style string. Defaults to the running host.

    Raises:
        MemoryUnavailableError: If the platform is not supported.
    """
    platform = sys.platform if platform is None else platform
    if platform.startswith("linux"):
        return ProcMeminfoReader()
    if platform.startswith("freebsd"):
        return PsutilMemoryReader()
    logger.debug("No memory reader for platform %s", platform)
    raise MemoryUnavailableError(f"unsupported platform: {platform}")
