"""Configuration for the memory status module."""

from dataclasses import dataclass, fields
from typing import Any, Mapping

from memline.errors import ConfigError
from memline.models import UsedMemoryMethod

STRING_OPTIONS = (
    "format",
    "memory_used_method",
    "unit",
    "pct_mark",
    "color_degraded",
    "color_bad",
)
OPTIONAL_STRING_OPTIONS = ("format_degraded", "threshold_degraded", "threshold_critical")


@dataclass(slots=True, frozen=True)
class MemoryConfig:
    """Settings for one memory status module."""

    format: str = "%used/%available"
    format_degraded: str | None = None
    threshold_degraded: str | None = None
    threshold_critical: str | None = None
    memory_used_method: str = UsedMemoryMethod.MEMAVAILABLE.value
    unit: str = "auto"
    decimals: int = 1
    pct_mark: str = "%"
    color_degraded: str = "#FFFF00"
    color_bad: str = "#FF0000"

    def __post_init__(self) -> None:
        for name in STRING_OPTIONS + OPTIONAL_STRING_OPTIONS:
            value = getattr(self, name)
            if value is None and name in OPTIONAL_STRING_OPTIONS:
                continue
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        # bool is an int subclass
        if not isinstance(self.decimals, int) or isinstance(self.decimals, bool):
            raise ConfigError(f"decimals must be an integer, got {self.decimals!r}")

        valid_methods = [method.value for method in UsedMemoryMethod]
        if self.memory_used_method not in valid_methods:
            raise ConfigError(
                f"invalid memory_used_method {self.memory_used_method!r}, "
                f"expected one of: {', '.join(valid_methods)}"
            )
        if self.decimals < 0:
            raise ConfigError(f"decimals must not be negative, got {self.decimals}")

    @property
    def used_method(self) -> UsedMemoryMethod:
        return UsedMemoryMethod(self.memory_used_method)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "MemoryConfig":
        """
        Build a config from an already parsed config section.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"unknown memory options: {', '.join(unknown)}")
        return cls(**values)
