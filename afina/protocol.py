"""Incremental parser for a subset of the memcached text protocol."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Union

from afina.commands import Add, Append, Command, Get, Set, Stats

_UINT32_MAX = 0xFFFFFFFF
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_PUT_COMMANDS = frozenset({"set", "add", "append", "prepend"})
_GET_COMMANDS = frozenset({"get", "gets"})


class ProtocolError(Exception):
    """Raised when the client input cannot be parsed."""


class _State(Enum):
    LF = auto()
    NAME = auto()
    PUT_KEY = auto()
    PUT_FLAGS = auto()
    PUT_EXPIRE_START = auto()
    PUT_EXPIRE = auto()
    PUT_BYTES = auto()
    GET_KEY = auto()


class Parser:
    """Accumulates input until a full command line has been read."""

    def __init__(self) -> None:
        self.reset()

    @property
    def name(self) -> str:
        """Name of the command parsed so far."""
        return self._name

    @property
    def complete(self) -> bool:
        return self._complete

    def reset(self) -> None:
        """Prepare the parser for a new command."""
        self._state = _State.NAME
        self._name = ""
        self._keys: list[str] = []
        self._cur_key = ""
        self._complete = False
        self._negative = False
        self._flags = 0
        self._bytes = 0
        self._expire = 0

    def parse(self, data: Union[str, bytes]) -> tuple[bool, int]:
        """Feed ``data``; return whether a command line is complete and how many characters were consumed."""
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("latin-1")
        consumed = 0
        for ch in data:
            if self._complete:
                break
            self._feed(ch, consumed)
            consumed += 1
        return self._complete, consumed

    def build(self) -> Optional[tuple[Command, int]]:
        """Return the parsed command and its body size, or None if not enough input was seen."""
        if self._state is not _State.LF:
            return None
        if self._name == "set":
            command: Command = Set(self._keys[0], self._flags, self._expire)
        elif self._name == "add":
            command = Add(self._keys[0], self._flags, self._expire)
        elif self._name == "append":
            command = Append(self._keys[0], self._flags, self._expire)
        elif self._name == "get":
            command = Get(list(self._keys))
        elif self._name == "stats":
            command = Stats()
        else:
            raise ProtocolError("Unsupported command")
        return command, self._bytes

    def _feed(self, ch: str, pos: int) -> None:
        state = self._state
        if state is _State.NAME:
            if ch in (" ", "\r"):
                if self._name in _PUT_COMMANDS:
                    self._state = _State.PUT_KEY
                elif self._name in _GET_COMMANDS:
                    self._state = _State.GET_KEY
                elif self._name == "stats":
                    self._state = _State.LF
                else:
                    raise ProtocolError(f"Unknown command name: {self._name}")
            else:
                self._name += ch
        elif state is _State.PUT_KEY:
            if ch == " ":
                self._state = _State.PUT_FLAGS
                self._keys.append(self._cur_key)
            else:
                self._cur_key += ch
        elif state is _State.GET_KEY:
            if ch == "\r":
                self._keys.append(self._cur_key)
                self._cur_key = ""
                self._state = _State.LF
            elif ch == " ":
                self._keys.append(self._cur_key)
                self._cur_key = ""
            else:
                self._cur_key += ch
        elif state is _State.PUT_FLAGS:
            if ch == " ":
                self._negative = False
                self._state = _State.PUT_EXPIRE_START
            elif ch.isdigit() and ch.isascii():
                self._flags = self._accumulate(self._flags, ch, "Flags")
        elif state is _State.PUT_EXPIRE_START:
            if ch == "-":
                self._negative = True
                self._state = _State.PUT_EXPIRE
            elif ch.isdigit() and ch.isascii():
                self._expire = int(ch)
                self._state = _State.PUT_EXPIRE
        elif state is _State.PUT_EXPIRE:
            if ch == " ":
                self._state = _State.PUT_BYTES
            elif ch.isdigit() and ch.isascii():
                expire = self._expire - int(ch) if self._negative else self._expire + int(ch)
                if not _INT32_MIN <= expire <= _INT32_MAX:
                    raise ProtocolError("Expire time field overflow")
                self._expire = expire
        elif state is _State.PUT_BYTES:
            if ch == "\r":
                self._state = _State.LF
            elif ch.isdigit() and ch.isascii():
                self._bytes = self._accumulate(self._bytes, ch, "Bytes")
        elif state is _State.LF:
            if ch == "\n":
                self._complete = True
            else:
                raise ProtocolError(f"Invalid char {ord(ch)} at position {pos}, \\n expected")

    @staticmethod
    def _accumulate(current: int, digit: str, field: str) -> int:
        value = current * 10 + int(digit)
        if value > _UINT32_MAX:
            raise ProtocolError(f"{field} field overflow")
        return value