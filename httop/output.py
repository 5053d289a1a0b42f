"""httop - Dashboard output"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from rich import box
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .aggregator import Aggregator, RateTracker, Row
from .controls import SortController
from .models import DisplayState, GlobalStats
from .patterns import AGENT_WIDTH, ELLIPSIS, PATH_WIDTH, VERSION

logger = logging.getLogger(__name__)

Sink = Callable[[RenderableType], None]

KEY_HELP = "s/p/c/i/u to sort, +/- to adjust rows, q to quit"


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:max(width - len(ELLIPSIS), 0)] + ELLIPSIS


def human_bytes(count: int) -> str:
    if count < 1024:
        return f"{count} B"
    size = float(count)
    for unit in ('KiB', 'MiB', 'GiB'):
        size /= 1024
        if size < 1024:
            return f"{size:.1f} {unit}"
    return f"{size / 1024:.1f} TiB"


def status_color(code: int) -> str:
    return 'green' if code < 400 else 'yellow' if code < 500 else 'red'


def build_dashboard(stats: GlobalStats, rows: List[Row], display: DisplayState,
                    avg_rps: float, instant_rps: float,
                    now: Optional[datetime] = None) -> RenderableType:
    now = now or datetime.now()

    header = Text(f"HTTOP (v{VERSION}) - {now:%Y-%m-%d %H:%M:%S}", style="bold cyan")

    totals = Text.from_markup(
        f"Total Requests: [cyan]{stats.total_requests:,}[/] | "
        f"RPS: [cyan]{avg_rps:.2f}[/] avg, [cyan]{instant_rps:.2f}[/] now | "
        f"Total Bytes: [cyan]{human_bytes(stats.total_bytes)}[/] ({stats.total_bytes:,}) | "
        f"Dropped: [dim]{stats.dropped_lines:,}[/]"
    )

    codes = Text("Status Codes: ", style="bold")
    if stats.status_histogram:
        for code, count in sorted(stats.status_histogram.items()):
            codes.append(f" {code}", style=status_color(code))
            codes.append(f": {count}")
    else:
        codes.append(" none yet", style="dim")

    table = Table(
        box=box.SIMPLE_HEAD,
        expand=True,
        title=f"Top Requests (Sort: {display.sort_key.label}, showing up to {display.row_limit})",
        title_justify="left",
        caption=KEY_HELP,
        caption_justify="left",
    )
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Count", justify="right", style="bold", no_wrap=True)
    table.add_column("IP", style="cyan", no_wrap=True)
    table.add_column("Status", justify="right", no_wrap=True)
    table.add_column("Path", no_wrap=True)
    table.add_column("User Agent", no_wrap=True, style="dim")

    for rank, (key, entry) in enumerate(rows, 1):
        table.add_row(
            str(rank),
            str(entry.count),
            key.remote_address,
            Text(str(key.status), style=status_color(key.status)),
            truncate(key.path, PATH_WIDTH),
            truncate(key.user_agent or '-', AGENT_WIDTH),
        )

    return Panel(
        Group(header, totals, codes, table),
        border_style="cyan",
        box=box.ROUNDED,
    )


class Renderer:
    """Reads a consistent view of the live state and hands it to a sink."""

    def __init__(self, aggregator: Aggregator, controller: SortController,
                 rate: RateTracker, sink: Sink):
        self.aggregator = aggregator
        self.controller = controller
        self.rate = rate
        self.sink = sink

    def render_once(self) -> bool:
        display = self.controller.state
        stats = self.aggregator.stats()
        rows = self.aggregator.snapshot(display.sort_key, display.row_limit)
        dashboard = build_dashboard(
            stats, rows, display,
            avg_rps=self.rate.sample(),
            instant_rps=self.rate.instantaneous(),
        )
        try:
            self.sink(dashboard)
        except OSError as e:
            logger.warning("Display unavailable, skipping refresh: %s", e)
            return False
        return True


class LiveSink:
    """Redraws the dashboard in place using rich's Live display."""

    def __init__(self, console: Optional[Console] = None, screen: bool = False):
        self.console = console or Console()
        self._live = Live(console=self.console, auto_refresh=False, screen=screen)

    def __enter__(self):
        self._live.start()
        return self

    def __exit__(self, *exc):
        self._live.stop()

    def __call__(self, renderable: RenderableType):
        self._live.update(renderable, refresh=True)
