"""Coverage for the entry store."""

from __future__ import annotations

from pathlib import Path

import pytest

from chatwith_cli import entries
from chatwith_cli.entries import Entry
from chatwith_cli.errors import IncompleteEntry, InvalidConfigLine


def test_load_skips_blank_lines_and_splits_options() -> None:
    store = entries.load("\nqwen qwen3:8b --verbose fast\n\n   \nllama llama3\n")

    assert store == [
        Entry(name="qwen", model="qwen3:8b", options=["--verbose", "fast"]),
        Entry(name="llama", model="llama3", options=[]),
    ]


def test_load_rejects_line_without_model() -> None:
    with pytest.raises(InvalidConfigLine) as excinfo:
        entries.load("qwen qwen3\nlonely\n")
    assert excinfo.value.line == "lonely"
    assert "specify a model" in str(excinfo.value)


@pytest.mark.parametrize("command", ["help", "entry", "remove", "show", "list"])
def test_load_rejects_reserved_names(command: str) -> None:
    with pytest.raises(InvalidConfigLine) as excinfo:
        entries.load(f"{command} some-model\n")
    assert "named after a valid command" in str(excinfo.value)


def test_upsert_adds_then_updates() -> None:
    store: list[Entry] = []

    added = entries.upsert(["foo", "modelA"], store)
    assert added.inserted
    assert added.message() == "Entry successfully added."
    assert store == [Entry(name="foo", model="modelA", options=[])]

    updated = entries.upsert(["foo", "modelB", "opt1"], store)
    assert updated.updated == 1
    assert updated.message() == "Updated 1 entry."
    assert store == [Entry(name="foo", model="modelB", options=["opt1"])]


def test_upsert_updates_every_duplicate() -> None:
    store = entries.load("foo a\nbar b\nfoo c x\n")

    result = entries.upsert(["foo", "z", "y"], store)

    assert result.message() == "Updated 2 entries."
    assert [entry.to_line() for entry in store] == ["foo z y", "bar b", "foo z y"]


def test_upsert_requires_name_and_model() -> None:
    with pytest.raises(IncompleteEntry):
        entries.upsert(["foo"], [])
    with pytest.raises(IncompleteEntry):
        entries.upsert([], [])


def test_upsert_refuses_reserved_name() -> None:
    store: list[Entry] = []
    with pytest.raises(InvalidConfigLine):
        entries.upsert(["list", "modelA"], store)
    assert store == []


def test_remove_reports_count_and_keeps_original() -> None:
    store = entries.load("foo a\nbar b\nfoo c\n")

    kept, removed = entries.remove(["foo"], store)

    assert removed == 2
    assert [entry.name for entry in kept] == ["bar"]
    assert len(store) == 3


def test_remove_absent_name_is_noop() -> None:
    store = entries.load("foo a\n")

    kept, removed = entries.remove(["missing"], store)

    assert removed == 0
    assert kept == store


def test_serialize_writes_one_line_per_entry() -> None:
    store = [Entry("foo", "a", ["x", "y"]), Entry("bar", "b")]
    assert entries.serialize(store) == "foo a x y\nbar b\n"
    assert entries.load(entries.serialize(store)) == store


def test_show_and_describe() -> None:
    store = entries.load("foo a\nbar b opt\n")

    assert entries.show(["bar", "nope"], store) == ["bar b opt"]
    assert entries.describe(store) == ["2 entries found in config file:", "foo a", "bar b opt"]
    assert entries.describe([]) == ["No entries found in config file."]


def test_read_and_write_store(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "chatwith.cfg"
    assert entries.read_store(path) == []

    entries.write_store([Entry("foo", "a", ["x"])], path)

    assert path.read_text(encoding="utf-8") == "foo a x\n"
    assert entries.read_store(path) == [Entry("foo", "a", ["x"])]


@pytest.mark.parametrize("args", [["", "modelA"], ["foo", ""], ["   ", "modelA"], ["foo", " \t"]])
def test_upsert_requires_non_empty_name_and_model(args: list[str]) -> None:
    store = entries.load("foo a\n")

    with pytest.raises(IncompleteEntry):
        entries.upsert(args, store)

    assert store == [Entry("foo", "a")]


@pytest.mark.parametrize("args", [["a b", "m"], ["foo", "model a"], ["foo", "m", "opt one"], ["foo", "m", ""]])
def test_upsert_refuses_tokens_that_would_not_reload(args: list[str]) -> None:
    store: list[Entry] = []

    with pytest.raises(InvalidConfigLine) as excinfo:
        entries.upsert(args, store)

    assert "no whitespace" in str(excinfo.value)
    assert store == []


def test_load_splits_on_line_feeds_only() -> None:
    store = entries.load("foo a\x0cx\r\nbar b\n")

    assert store == [Entry("foo", "a", ["x"]), Entry("bar", "b")]
