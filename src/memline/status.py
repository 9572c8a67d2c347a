"""One render cycle of the memory status module."""

import logging

from memline.config import MemoryConfig
from memline.errors import MemoryReadError, MemoryUnavailableError
from memline.formatting import render_template
from memline.models import ColorState, MemorySnapshot, StatusOutput
from memline.readers import MemoryReader, select_reader
from memline.thresholds import classify

logger = logging.getLogger(__name__)

READ_FAILURE_TEXT = "can't read memory"


class MemoryStatus:
    """
    Renders the memory status line.

    Each call to ``render`` reads fresh counters; nothing is kept between
    calls except the reader itself. Failures never propagate: they are
    logged and turned into a fixed output.
    """

    def __init__(
        self,
        config: MemoryConfig | None = None,
        reader: MemoryReader | None = None,
    ) -> None:
        self._config = config or MemoryConfig()
        self._reader = reader

    @property
    def config(self) -> MemoryConfig:
        return self._config

    def render(self) -> StatusOutput:
        """Read memory counters and render them."""
        try:
            if self._reader is None:
                self._reader = select_reader()
            snapshot = self._reader.read()
            return self.render_snapshot(snapshot)
        except MemoryUnavailableError:
            logger.error("Memory status information is not supported on this system")
            return StatusOutput("")
        except MemoryReadError as exc:
            logger.error("Cannot read system memory")
            logger.debug("Read failure: %s", exc)
            return StatusOutput(READ_FAILURE_TEXT)
        except ZeroDivisionError:
            logger.error("Total memory is zero, cannot compute percentages")
            return StatusOutput(READ_FAILURE_TEXT)

    def render_snapshot(self, snapshot: MemorySnapshot) -> StatusOutput:
        """
        Render an already read snapshot.

        Raises:
            ZeroDivisionError: If a percentage is requested and total is zero.
        """
        config = self._config
        used = snapshot.used(config.used_method)
        color = classify(
            snapshot.available,
            snapshot.total,
            config.threshold_degraded,
            config.threshold_critical,
        )

        template = config.format
        if color is not ColorState.NORMAL and config.format_degraded is not None:
            template = config.format_degraded

        text = render_template(
            template,
            snapshot,
            used,
            unit=config.unit,
            decimals=config.decimals,
            pct_mark=config.pct_mark,
        )
        return StatusOutput(text, color)
