"""memline - Textual status line viewer and command line entry point."""

import argparse
import json
import logging
import sys
from queue import Empty, Queue

from rich.text import Text
from textual.app import App, ComposeResult
from textual.logging import TextualHandler
from textual.widgets import Footer, Static

from memline import __version__
from memline.config import MemoryConfig
from memline.errors import ConfigError
from memline.models import ColorState, StatusOutput, UsedMemoryMethod
from memline.monitor import StatusMonitor
from memline.status import MemoryStatus

logger = logging.getLogger(__name__)

LOG_FORMAT = "memline: %(message)s"


def status_text(output: StatusOutput, config: MemoryConfig) -> Text:
    """Style a status output with the configured color for its state."""
    if output.color is ColorState.DEGRADED:
        return Text(output.full_text, style=config.color_degraded)
    if output.color is ColorState.CRITICAL:
        return Text(output.full_text, style=config.color_bad)
    return Text(output.full_text)


class StatusLine(Static):
    """Widget showing the latest memory status line."""

    DEFAULT_CSS = """
    StatusLine {
        height: 1;
        padding: 0 1;
        background: $surface;
    }
    """

    def __init__(self, config: MemoryConfig, *args, **kwargs) -> None:
        """Initialize StatusLine."""
        super().__init__("Loading memory info...", *args, **kwargs)
        self._config = config
        self._output: StatusOutput | None = None

    @property
    def output(self) -> StatusOutput | None:
        """The status output currently displayed."""
        return self._output

    def update_status(self, output: StatusOutput) -> None:
        """Display a new status output."""
        self._output = output
        self.update(status_text(output, self._config))


class MemlineApp(App):
    """Main memline application."""

    TITLE = "memline"
    SUB_TITLE = "Memory Status"

    CSS = """
    Screen {
        layout: vertical;
    }

    #status-line {
        dock: top;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        status: MemoryStatus | None = None,
        poll_rate: float = 5.0,
    ) -> None:
        """Initialize the MemlineApp."""
        super().__init__()
        self._status = status or MemoryStatus()
        self._update_queue: Queue[StatusOutput] = Queue()
        self._monitor = StatusMonitor(self._status, self._update_queue, poll_rate=poll_rate)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield StatusLine(self._status.config, id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        """Start the status monitor when the app is mounted."""
        self._monitor.start()
        self.set_interval(0.5, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Show the most recent status output from the queue."""
        output = None
        while True:
            try:
                output = self._update_queue.get_nowait()
            except Empty:
                break

        if output is not None:
            self.query_one("#status-line", StatusLine).update_status(output)

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._monitor.stop()
        self.exit()


def build_parser() -> argparse.ArgumentParser:
    defaults = MemoryConfig()
    parser = argparse.ArgumentParser(
        prog="memline",
        description="Render system memory usage as a status bar line",
    )
    parser.add_argument("--version", action="version", version=f"memline {__version__}")
    parser.add_argument("--format", default=defaults.format, help="Status line template")
    parser.add_argument(
        "--format-degraded",
        help="Template used while below the degraded or critical threshold",
    )
    parser.add_argument("--threshold-degraded", help="e.g. 10%% or 1G")
    parser.add_argument("--threshold-critical", help="e.g. 5%% or 512M")
    parser.add_argument(
        "--memory-used-method",
        default=defaults.memory_used_method,
        choices=[method.value for method in UsedMemoryMethod],
    )
    parser.add_argument("--unit", default=defaults.unit, help="auto, B, KiB, MiB, GiB or TiB")
    parser.add_argument("--decimals", type=int, default=defaults.decimals)
    parser.add_argument("--pct-mark", default=defaults.pct_mark)
    parser.add_argument(
        "--color-degraded",
        default=defaults.color_degraded,
        help="Color while below the degraded threshold",
    )
    parser.add_argument(
        "--color-bad",
        default=defaults.color_bad,
        help="Color while below the critical threshold",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=5.0,
        help="Seconds between updates (default: 5)",
    )
    parser.add_argument("--once", action="store_true", help="Print one status line and exit")
    parser.add_argument("--json", action="store_true", help="With --once, print an i3bar block")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> MemoryConfig:
    return MemoryConfig(
        format=args.format,
        format_degraded=args.format_degraded,
        threshold_degraded=args.threshold_degraded,
        threshold_critical=args.threshold_critical,
        memory_used_method=args.memory_used_method,
        unit=args.unit,
        decimals=args.decimals,
        pct_mark=args.pct_mark,
        color_degraded=args.color_degraded,
        color_bad=args.color_bad,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for memline."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING

    try:
        config = config_from_args(args)
    except ConfigError as exc:
        print(f"memline: {exc}", file=sys.stderr)
        return 2

    status = MemoryStatus(config)

    if args.once:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        output = status.render()
        if args.json:
            print(json.dumps(output.to_block(config)))
        else:
            print(output.full_text)
        return 0

    # Keep log records away from the terminal the app draws on
    logging.basicConfig(level=level, handlers=[TextualHandler()])
    logger.debug("Starting status viewer, interval %.1fs", args.interval)
    MemlineApp(status, poll_rate=args.interval).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
