"""Tests for memline data models."""

from memline.config import MemoryConfig
from memline.models import ColorState, MemorySnapshot, StatusOutput, UsedMemoryMethod

GiB = 1024**3
MiB = 1024**2


def make_snapshot() -> MemorySnapshot:
    return MemorySnapshot(
        total=16 * GiB,
        free=2 * GiB,
        available=10 * GiB,
        buffers=512 * MiB,
        cached=5 * GiB,
        shared=256 * MiB,
    )


def test_used_memavailable():
    """Test used memory is total minus available."""
    snapshot = make_snapshot()
    assert snapshot.used(UsedMemoryMethod.MEMAVAILABLE) == 6 * GiB


def test_used_classical():
    """Test classical used memory subtracts free, buffers and cached."""
    snapshot = make_snapshot()
    expected = 16 * GiB - 2 * GiB - 512 * MiB - 5 * GiB
    assert snapshot.used(UsedMemoryMethod.CLASSICAL) == expected


def test_used_methods_differ():
    """Test both methods are computed independently for one snapshot."""
    snapshot = make_snapshot()
    assert snapshot.used(UsedMemoryMethod.MEMAVAILABLE) != snapshot.used(
        UsedMemoryMethod.CLASSICAL
    )


def test_used_is_not_clamped():
    """Test inconsistent counters are not clamped to zero."""
    snapshot = MemorySnapshot(total=100, free=80, available=0, buffers=30, cached=10, shared=0)
    assert snapshot.used(UsedMemoryMethod.CLASSICAL) == -20


def test_memory_snapshot_is_frozen():
    """Test that MemorySnapshot is immutable (frozen)."""
    snapshot = make_snapshot()
    try:
        snapshot.total = 0
        raise AssertionError("Should have raised FrozenInstanceError")
    except AttributeError:
        pass  # Expected behavior for frozen dataclass


def test_memory_snapshot_uses_slots():
    """Test that MemorySnapshot uses __slots__."""
    assert not hasattr(make_snapshot(), "__dict__")


def test_color_state_keys():
    """Test ColorState values are the status bar color keys."""
    assert ColorState.NORMAL.value is None
    assert ColorState.DEGRADED.value == "color_degraded"
    assert ColorState.CRITICAL.value == "color_bad"


class TestStatusOutput:
    """Tests for StatusOutput."""

    def test_default_color_is_normal(self):
        """Test outputs default to the normal color state."""
        assert StatusOutput("1.0 GiB").color is ColorState.NORMAL

    def test_block_without_color(self):
        """Test a normal block has no color key."""
        block = StatusOutput("1.0 GiB").to_block(MemoryConfig())
        assert block == {"name": "memory", "full_text": "1.0 GiB"}

    def test_block_degraded_color(self):
        """Test a degraded block uses the configured color."""
        config = MemoryConfig(color_degraded="#AABB00")
        block = StatusOutput("low", ColorState.DEGRADED).to_block(config)
        assert block["color"] == "#AABB00"

    def test_block_critical_color(self):
        """Test a critical block uses the bad color."""
        block = StatusOutput("low", ColorState.CRITICAL).to_block(MemoryConfig())
        assert block["color"] == "#FF0000"
