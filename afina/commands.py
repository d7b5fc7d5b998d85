"""Commands executed against a storage on behalf of protocol clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from afina.storage import Storage

STORED = "STORED"
NOT_STORED = "NOT_STORED"
DELETED = "DELETED"
NOT_FOUND = "NOT_FOUND"
END = "END"


class Command(ABC):
    """A single client request that can be run against a storage."""

    @abstractmethod
    def execute(self, storage: Storage, args: str) -> str:
        """Run the command with the data block ``args``; return the response."""


@dataclass(frozen=True)
class InsertCommand(Command, ABC):
    """Base for commands that store a data block under a key."""

    key: str
    flags: int = 0
    expire: int = 0


@dataclass(frozen=True)
class Add(InsertCommand):
    """Store the data only if the key is not present yet."""

    def execute(self, storage: Storage, args: str) -> str:
        return STORED if storage.put_if_absent(self.key, args) else NOT_STORED


@dataclass(frozen=True)
class Append(InsertCommand):
    """Append the data to the value of an existing key."""

    def execute(self, storage: Storage, args: str) -> str:
        current = storage.get(self.key)
        if current is None:
            return NOT_STORED
        return STORED if storage.set(self.key, current + args) else NOT_STORED


@dataclass(frozen=True)
class Replace(InsertCommand):
    """Replace the value of an existing key."""

    def execute(self, storage: Storage, args: str) -> str:
        return STORED if storage.set(self.key, args) else NOT_STORED


@dataclass(frozen=True)
class Set(InsertCommand):
    """Store the data under the key, creating or replacing the association."""

    def execute(self, storage: Storage, args: str) -> str:
        return STORED if storage.put(self.key, args) else NOT_STORED


@dataclass(frozen=True)
class Delete(Command):
    """Remove the key given as the command argument."""

    def execute(self, storage: Storage, args: str) -> str:
        return DELETED if storage.delete(args.strip()) else NOT_FOUND


@dataclass(frozen=True)
class Get(Command):
    """Retrieve the values for a set of keys."""

    keys: list[str] = field(default_factory=list)

    def execute(self, storage: Storage, args: str) -> str:
        items = []
        for key in self.keys:
            value = storage.get(key)
            if value is not None:
                items.append(f"VALUE {key} {len(value)}\r\n{value}\r\n")
        return "".join(items) + END


@dataclass(frozen=True)
class Stats(Command):
    """Report server statistics; no statistics are collected, so the list is empty."""

    def execute(self, storage: Storage, args: str) -> str:
        return END