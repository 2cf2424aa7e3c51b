"""Commands that read, write and delete state entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from transactkit.protos import MessageFields, MessageWriter, SerializationError


@dataclass(frozen=True)
class BytesEntry:
    """A key paired with an opaque value."""

    key: str
    value: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.key:
            writer.string(1, self.key)
        if self.value:
            writer.bytes(2, self.value)
        return writer.getvalue()

    @classmethod
    def _from_fields(cls, fields: MessageFields) -> BytesEntry:
        return cls(key=fields.string(1), value=fields.bytes(2))

    @classmethod
    def from_bytes(cls, data: bytes) -> BytesEntry:
        try:
            return cls._from_fields(MessageFields.parse(data))
        except SerializationError as err:
            raise SerializationError("Unable to get BytesEntry from bytes") from err


@dataclass(frozen=True)
class SetState:
    """Write each entry's value under its key."""

    state_writes: tuple[BytesEntry, ...]

    def __init__(self, state_writes: Iterable[BytesEntry]) -> None:
        object.__setattr__(self, "state_writes", tuple(state_writes))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        for entry in self.state_writes:
            writer.bytes(1, entry.to_bytes())
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> SetState:
        try:
            fields = MessageFields.parse(data)
            writes = [
                BytesEntry._from_fields(MessageFields.parse(raw))
                for raw in fields.repeated_bytes(1)
            ]
        except SerializationError as err:
            raise SerializationError("Unable to get SetState from bytes") from err
        return cls(writes)


@dataclass(frozen=True)
class _StateKeys:
    state_keys: tuple[str, ...]

    def __init__(self, state_keys: Iterable[str]) -> None:
        object.__setattr__(self, "state_keys", tuple(state_keys))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        for key in self.state_keys:
            writer.string(1, key)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes):
        try:
            keys = MessageFields.parse(data).repeated_strings(1)
        except SerializationError as err:
            raise SerializationError(f"Unable to get {cls.__name__} from bytes") from err
        return cls(keys)


@dataclass(frozen=True, init=False)
class DeleteState(_StateKeys):
    """Delete the entries under the given keys."""

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> DeleteState:
        return super().from_bytes(data)


@dataclass(frozen=True, init=False)
class GetState(_StateKeys):
    """Read the entries under the given keys."""

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> GetState:
        return super().from_bytes(data)