"""Entry store: named aliases binding a model identifier to its options."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import IncompleteEntry, InvalidConfigLine
from .log import get_logger
from .transcript import read_text, split_lines

RESERVED_COMMANDS = ("help", "entry", "remove", "show", "list")

MISSING_MODEL = "Make sure to specify a model."
INCOMPLETE = "Incomplete entry given. Please provide at least a name and a model."
WHITESPACE = "Make sure name, model and options contain no whitespace."
RESERVED_NAME = "Make sure the entry is not named after a valid command."

logger = get_logger("entries")


@dataclass(slots=True)
class Entry:
    name: str
    model: str
    options: List[str] = field(default_factory=list)

    def to_line(self) -> str:
        return " ".join([self.name, self.model, *self.options])

    def __str__(self) -> str:
        return self.to_line()


@dataclass(slots=True)
class UpsertResult:
    """Outcome of :func:`upsert`; ``updated == 0`` means a new entry was added."""

    updated: int

    @property
    def inserted(self) -> bool:
        return self.updated == 0

    def message(self) -> str:
        if self.inserted:
            return "Entry successfully added."
        if self.updated == 1:
            return "Updated 1 entry."
        return f"Updated {self.updated} entries."


def is_reserved(name: str) -> bool:
    return name.lower() in RESERVED_COMMANDS


def load(text: str) -> List[Entry]:
    """Parse the config file contents into entries.

    Any malformed line aborts the whole load so a corrupted config is never
    operated on partially.
    """

    store: List[Entry] = []
    for line in split_lines(text):
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) == 1:
            raise InvalidConfigLine(MISSING_MODEL, line)
        if is_reserved(tokens[0]):
            raise InvalidConfigLine(RESERVED_NAME, line)
        store.append(Entry(name=tokens[0], model=tokens[1], options=tokens[2:]))
    return store


def serialize(store: Iterable[Entry]) -> str:
    return "".join(f"{entry.to_line()}\n" for entry in store)


def find(name: str, store: Iterable[Entry]) -> Optional[Entry]:
    for entry in store:
        if entry.name == name:
            return entry
    return None


def upsert(args: Sequence[str], store: List[Entry]) -> UpsertResult:
    """Add an entry or update every entry sharing its name, in place."""

    if len(args) < 2 or not args[0].strip() or not args[1].strip():
        raise IncompleteEntry(INCOMPLETE)
    if any(token.split() != [token] for token in args):
        raise InvalidConfigLine(WHITESPACE, " ".join(args))
    name, model = args[0], args[1]
    options = list(args[2:])
    if is_reserved(name):
        raise InvalidConfigLine(RESERVED_NAME, " ".join(args))

    count = 0
    for entry in store:
        if entry.name == name:
            entry.model = model
            entry.options = list(options)
            count += 1

    if count == 0:
        store.append(Entry(name=name, model=model, options=options))
    logger.debug("upsert %s -> %s (%d updated)", name, model, count)
    return UpsertResult(updated=count)


def remove(names: Iterable[str], store: Sequence[Entry]) -> Tuple[List[Entry], int]:
    """Return a copy of ``store`` without the named entries and the count removed."""

    doomed = set(names)
    kept = [entry for entry in store if entry.name not in doomed]
    return kept, len(store) - len(kept)


def show(names: Iterable[str], store: Iterable[Entry]) -> List[str]:
    wanted = set(names)
    return [entry.to_line() for entry in store if entry.name in wanted]


def describe(store: Sequence[Entry]) -> List[str]:
    """Return the lines printed by ``list``."""

    if not store:
        return ["No entries found in config file."]
    return [f"{len(store)} entries found in config file:"] + [entry.to_line() for entry in store]


def read_store(path: Path) -> List[Entry]:
    if not path.exists():
        return []
    return load(read_text(path))


def write_store(store: Iterable[Entry], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(store), encoding="utf-8", newline="")
    logger.debug("wrote entry store to %s", path)


__all__ = [
    "RESERVED_COMMANDS",
    "Entry",
    "UpsertResult",
    "describe",
    "find",
    "is_reserved",
    "load",
    "read_store",
    "remove",
    "serialize",
    "show",
    "upsert",
    "write_store",
]
