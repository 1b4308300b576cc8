"""Rendering of command results as rich tables, TSV or JSON."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

__all__ = [
    "Column",
    "JSONTransform",
    "OutputMode",
    "Printer",
    "any_string",
    "apply_json_transform",
    "field_column",
    "get_at_path",
    "id_string",
    "select_fields",
    "unwrap_primary",
]

_ID_KEYS: tuple[str, ...] = (
    "record_id",
    "entry_id",
    "object_id",
    "list_id",
    "note_id",
    "task_id",
    "comment_id",
    "thread_id",
    "webhook_id",
    "workspace_member_id",
    "meeting_id",
    "call_recording_id",
    "attribute_id",
    "option_id",
    "status_id",
)


class OutputMode(str, Enum):
    TABLE = "table"
    PLAIN = "plain"
    JSON = "json"


@dataclass(frozen=True)
class JSONTransform:
    """Post-processing applied to JSON output."""

    results_only: bool = False
    select: tuple[str, ...] = ()

    @property
    def active(self) -> bool:
        return self.results_only or bool(self.select)


def any_string(value: Any) -> str:
    """Render a scalar for a table cell; containers become compact JSON."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def id_string(value: Any) -> str:
    """Return the most specific identifier inside an Attio ``id`` object."""

    if isinstance(value, Mapping):
        for key in _ID_KEYS:
            candidate = any_string(value.get(key))
            if candidate:
                return candidate
    return any_string(value)


def unwrap_primary(value: Any) -> Any:
    """Strip the outer envelope: ``data``, ``results`` or a lone key."""

    if not isinstance(value, dict):
        return value
    if "data" in value:
        return value["data"]
    if "results" in value:
        return value["results"]
    if len(value) == 1:
        return next(iter(value.values()))
    return value


def get_at_path(value: Any, path: str) -> tuple[Any, bool]:
    """Resolve a dotted path; numeric segments index into lists."""

    path = path.strip()
    if not path:
        return None, False
    current = value
    for raw_segment in path.split("."):
        segment = raw_segment.strip()
        if not segment:
            return None, False
        if isinstance(current, dict):
            if segment not in current:
                return None, False
            current = current[segment]
        elif isinstance(current, list):
            try:
                index = int(segment)
            except ValueError:
                return None, False
            if index < 0 or index >= len(current):
                return None, False
            current = current[index]
        else:
            return None, False
    return current, True


def _select_from_item(item: Any, fields: Sequence[str]) -> Any:
    if not isinstance(item, dict):
        return item
    selected: dict[str, Any] = {}
    for name in fields:
        found, ok = get_at_path(item, name)
        if ok:
            selected[name] = found
    return selected


def select_fields(value: Any, fields: Sequence[str]) -> Any:
    if isinstance(value, list):
        return [_select_from_item(item, fields) for item in value]
    return _select_from_item(value, fields)


def apply_json_transform(value: Any, transform: JSONTransform) -> Any:
    # Round-trip through JSON so pydantic models and tuples behave like plain data.
    normalized = json.loads(json.dumps(value, default=_json_default))
    if transform.results_only:
        normalized = unwrap_primary(normalized)
    if transform.select:
        normalized = select_fields(normalized, transform.select)
    return normalized


def _json_default(value: Any) -> Any:
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@dataclass(frozen=True)
class Column:
    """Table column: a header and a function extracting the cell text."""

    header: str
    extract: Callable[[Mapping[str, Any]], Any]

    def render(self, row: Mapping[str, Any]) -> str:
        return any_string(self.extract(row))


def field_column(header: str, key: str) -> Column:
    return Column(header, lambda row: row.get(key))


@dataclass
class Printer:
    """Writes results to stdout according to the selected output mode."""

    mode: OutputMode = OutputMode.TABLE
    transform: JSONTransform = field(default_factory=JSONTransform)

    @property
    def is_json(self) -> bool:
        return self.mode is OutputMode.JSON

    @property
    def is_plain(self) -> bool:
        return self.mode is OutputMode.PLAIN

    def json(self, value: Any) -> None:
        if self.transform.active:
            value = apply_json_transform(value, self.transform)
        typer.echo(json.dumps(value, indent=2, ensure_ascii=False, default=_json_default))

    def table(self, columns: Sequence[Column], rows: Iterable[Mapping[str, Any]]) -> None:
        headers = [column.header for column in columns]
        cells = [[column.render(row) for column in columns] for row in rows]
        self.grid(headers, cells)

    def grid(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        if self.is_plain:
            typer.echo("\t".join(headers))
            for row in rows:
                typer.echo("\t".join(cell.replace("\t", " ").replace("\n", " ") for cell in row))
            return

        table = Table(show_header=True, header_style="bold magenta", box=None, pad_edge=False)
        for header in headers:
            table.add_column(header, overflow="fold")
        for row in rows:
            table.add_row(*(Text(cell) for cell in row))
        Console(soft_wrap=True).print(table)

    def fields(self, pairs: Iterable[tuple[str, Any]]) -> None:
        """Render a FIELD/VALUE table for a single resource."""
        self.grid(["FIELD", "VALUE"], [[name, any_string(value)] for name, value in pairs])

    def line(self, text: str) -> None:
        typer.echo(text)
