"""
Live progress panel for long single-threaded loops (exports, coverage scans).

Rich allows one live display per console at a time, so this is not used from
the concurrent batch builder.
"""

import time
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ProgressDisplay:
    """
    Context manager showing counters, elapsed time and rate.

    Usage:
        with ProgressDisplay("Writing por_eng.tsv") as progress:
            for i, line in enumerate(lines, 1):
                progress.update(Words=i)

    The first counter passed to update() drives the rate column.
    """

    def __init__(
        self,
        title: str = "Progress",
        update_interval: int = 1000,
        refresh_per_second: int = 4,
        console: Optional[Console] = None,
    ):
        self.title = title
        self.update_interval = update_interval
        self.refresh_per_second = refresh_per_second
        self.console = console

        self.metrics: Dict[str, Any] = {}
        self.live: Optional[Live] = None
        self.start_time = 0.0
        self._calls = 0
        self._rate_key: Optional[str] = None

    def __enter__(self):
        self.start_time = time.monotonic()
        self.live = Live(
            self._render(),
            refresh_per_second=self.refresh_per_second,
            console=self.console,
            transient=False,
        )
        self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self.live.update(self._render())
            self.live.__exit__(exc_type, exc_val, exc_tb)
        return False

    def update(self, **metrics: Any) -> None:
        self._calls += 1
        self.metrics.update(metrics)
        if self._rate_key is None and metrics:
            self._rate_key = next(iter(metrics))

        if self._calls % self.update_interval == 0 and self.live:
            self.live.update(self._render())

    def elapsed(self) -> float:
        return time.monotonic() - self.start_time if self.start_time else 0.0

    def _render(self) -> Panel:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)

        rows = dict(self.metrics)
        elapsed = self.elapsed()
        rows["Elapsed"] = elapsed
        count = rows.get(self._rate_key) if self._rate_key else None
        if elapsed > 0 and isinstance(count, (int, float)):
            rows["Rate"] = count / elapsed

        for key, value in rows.items():
            grid.add_row(
                Text(f"{key}:", style="bold grey50"),
                Text(format_metric(key, value), style="bright_cyan"),
            )

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")


def format_metric(key: str, value: Any) -> str:
    """Render a metric value: MM:SS for elapsed, n/s for rates, 1,234 for ints."""
    if key == "Elapsed" and isinstance(value, float):
        minutes, seconds = divmod(int(value), 60)
        hours, minutes = divmod(minutes, 60)
        if hours:
            return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        return f"{minutes:02d}:{seconds:02d}"
    if key == "Rate" and isinstance(value, float):
        return f"{value:,.1f}/s"
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, int):
        return f"{value:,}"
    return str(value)
