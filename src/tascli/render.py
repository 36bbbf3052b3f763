from __future__ import annotations

import io
import json
from typing import Any, Iterable, List, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Decoded, PowerResult, RawJSON, StatusResult, TimerTable

FORMATS = ("json", "table")
TIMER_HEADERS = ["Name", "Enabled", "Mode", "Time", "Window", "Days", "Repeat", "Output", "Action"]
TIMERS_DOC_URL = "https://tasmota.github.io/docs/Timers/#json-payload-anatomy"


def render_json(value: Any) -> str:
    return json.dumps(value, indent="\t", ensure_ascii=False)


def render_state(label: str, state: str) -> str:
    return f"{label}:{state}"


def render_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render plain-text columns: header, a row of dashes, then ``rows``.

    Columns are sized to their widest cell and separated by two spaces.
    """
    table = Table(box=None, pad_edge=False, show_edge=False)
    for h in headers:
        table.add_column(h, no_wrap=True)
    table.add_row(*(Text("-" * len(h)) for h in headers))
    for row in rows:
        table.add_row(*(Text(str(c)) for c in row))

    buf = io.StringIO()
    console = Console(file=buf, width=1000, color_system=None, highlight=False, emoji=False)
    console.print(table)
    lines: List[str] = [line.rstrip() for line in buf.getvalue().splitlines()]
    return "\n".join(lines)


def timer_rows(table: TimerTable) -> List[List[Any]]:
    return [
        [name, s.enable, s.mode, s.time, s.window, s.days, s.repeat, s.output, s.action]
        for name, s in table.named()
    ]


def render_timers(table: TimerTable) -> str:
    body = render_table(TIMER_HEADERS, timer_rows(table))
    return f"{body}\n\nFurther details available here: {TIMERS_DOC_URL}"


def render(value: Decoded, fmt: str = "table", label: str = "", full: bool = False) -> str:
    """Render a decoded response.

    ``full`` marks a status response requested as ``statusall``: the whole
    status tree is printed as JSON whatever ``fmt`` says. Custom command
    output is always JSON too.
    """
    if fmt not in FORMATS:
        raise ValueError(f"unknown output format: {fmt}")
    as_json = fmt == "json"

    if isinstance(value, RawJSON):
        return render_json(value.value)
    if isinstance(value, PowerResult):
        if as_json:
            return render_json({"device": label, "power": value.power})
        return render_state(label, value.power)
    if isinstance(value, StatusResult):
        if full:
            return render_json(value.tree)
        if as_json:
            return render_json({"device": label, "power": value.state})
        return render_state(label, value.state)
    if isinstance(value, TimerTable):
        if as_json:
            return render_json(value.to_dict())
        return render_timers(value)
    raise TypeError(f"cannot render {type(value).__name__}")
