"""Tests for result rendering."""

from __future__ import annotations

import json

import pytest

from attio_cli.cli.output import (
    Column,
    JSONTransform,
    OutputMode,
    Printer,
    any_string,
    apply_json_transform,
    field_column,
    get_at_path,
    id_string,
    select_fields,
    unwrap_primary,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        ("text", "text"),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (2.0, "2"),
        (2.5, "2.5"),
        ({"a": [1, 2]}, '{"a":[1,2]}'),
    ],
)
def test_any_string(value, expected: str) -> None:
    assert any_string(value) == expected


@pytest.mark.unit
def test_id_string_prefers_specific_keys() -> None:
    assert id_string({"workspace_id": "w1", "object_id": "o1", "record_id": "r1"}) == "r1"
    assert id_string({"workspace_id": "w1", "task_id": "t1"}) == "t1"
    assert id_string("plain") == "plain"
    assert id_string(None) == ""


@pytest.mark.unit
def test_unwrap_primary() -> None:
    assert unwrap_primary({"data": [1], "pagination": {}}) == [1]
    assert unwrap_primary({"results": [2]}) == [2]
    assert unwrap_primary({"only": 3}) == 3
    assert unwrap_primary({"a": 1, "b": 2}) == {"a": 1, "b": 2}
    assert unwrap_primary([4]) == [4]


@pytest.mark.unit
def test_get_at_path() -> None:
    value = {"id": {"record_id": "r1"}, "values": {"name": [{"value": "Ada"}]}}

    assert get_at_path(value, "id.record_id") == ("r1", True)
    assert get_at_path(value, "values.name.0.value") == ("Ada", True)
    assert get_at_path(value, "values.name.5") == (None, False)
    assert get_at_path(value, "values.name.x") == (None, False)
    assert get_at_path(value, "missing") == (None, False)
    assert get_at_path(value, "id..record_id") == (None, False)
    assert get_at_path(value, " ") == (None, False)


@pytest.mark.unit
def test_select_fields_on_lists_and_objects() -> None:
    rows = [{"id": {"record_id": "r1"}, "name": "A", "extra": 1}, "scalar"]

    assert select_fields(rows, ["id.record_id", "name", "nope"]) == [{"id.record_id": "r1", "name": "A"}, "scalar"]
    assert select_fields({"name": "B"}, ["name"]) == {"name": "B"}


@pytest.mark.unit
def test_apply_json_transform_results_only_then_select() -> None:
    payload = {"data": [{"id": {"note_id": "n1"}, "title": "Hi"}], "pagination": {"has_more": False}}

    transformed = apply_json_transform(payload, JSONTransform(results_only=True, select=("title",)))

    assert transformed == [{"title": "Hi"}]


@pytest.mark.unit
def test_printer_json_applies_transform(capsys: pytest.CaptureFixture[str]) -> None:
    printer = Printer(mode=OutputMode.JSON, transform=JSONTransform(results_only=True))

    printer.json({"data": {"name": "Acme"}})

    assert json.loads(capsys.readouterr().out) == {"name": "Acme"}


@pytest.mark.unit
def test_printer_plain_writes_tsv(capsys: pytest.CaptureFixture[str]) -> None:
    columns = [Column("ID", lambda row: id_string(row.get("id"))), field_column("NAME", "name")]
    rows = [{"id": {"record_id": "r1"}, "name": "Tab\tbed\nname"}, {"id": {"record_id": "r2"}}]

    Printer(mode=OutputMode.PLAIN).table(columns, rows)

    assert capsys.readouterr().out.splitlines() == ["ID\tNAME", "r1\tTab bed name", "r2\t"]


@pytest.mark.unit
def test_printer_table_renders_markup_literally(capsys: pytest.CaptureFixture[str]) -> None:
    Printer(mode=OutputMode.TABLE).fields([("name", "[bold]Acme[/bold]"), ("active", True)])

    out = capsys.readouterr().out
    assert "FIELD" in out
    assert "[bold]Acme[/bold]" in out
    assert "true" in out


@pytest.mark.unit
def test_printer_flags() -> None:
    assert Printer(mode=OutputMode.JSON).is_json
    assert Printer(mode=OutputMode.PLAIN).is_plain
    assert not Printer().is_json
    assert not JSONTransform().active
