"""Data models for memline."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from memline.config import MemoryConfig


class UsedMemoryMethod(Enum):
    """How the used memory figure is derived from the counters."""

    MEMAVAILABLE = "memavailable"
    CLASSICAL = "classical"


class ColorState(Enum):
    """Color state of a rendered status line."""

    NORMAL = None
    DEGRADED = "color_degraded"
    CRITICAL = "color_bad"


@dataclass(slots=True, frozen=True)
class MemorySnapshot:
    """Immutable snapshot of the system memory counters, in bytes."""

    total: int
    free: int
    available: int
    buffers: int
    cached: int
    shared: int

    def used(self, method: UsedMemoryMethod) -> int:
        """
        Compute used memory.

        The result is not clamped: inconsistent counters can make it negative.
        """
        if method is UsedMemoryMethod.MEMAVAILABLE:
            return self.total - self.available
        return self.total - self.free - self.buffers - self.cached


@dataclass(slots=True, frozen=True)
class StatusOutput:
    """One rendered status line."""

    full_text: str
    color: ColorState = ColorState.NORMAL

    def to_block(self, config: "MemoryConfig") -> dict[str, Any]:
        """Build an i3bar-style block for this output."""
        block: dict[str, Any] = {"name": "memory", "full_text": self.full_text}
        if self.color is ColorState.DEGRADED:
            block["color"] = config.color_degraded
        elif self.color is ColorState.CRITICAL:
            block["color"] = config.color_bad
        return block
