"""Changes to state, expressed as keys and values."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from transactkit.protos import InvalidTypeError, MessageFields, MessageWriter, SerializationError


class _ChangeType(enum.IntEnum):
    TYPE_UNSET = 0
    SET = 1
    DELETE = 2


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class StateChange:
    """A change to state: either setting a key to a value or deleting a key."""

    key: str
    _change_type: _ChangeType = _ChangeType.TYPE_UNSET

    def has_key(self, key: str) -> bool:
        """Compare by key, regardless of the kind of change."""
        return self.key == key

    def _value(self) -> bytes:
        return b""

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.key:
            writer.string(1, self.key)
        value = self._value()
        if value:
            writer.bytes(2, value)
        writer.varint(3, int(self._change_type))
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> StateChange:
        """Decode a state change; the result is a StateChangeSet or StateChangeDelete."""
        try:
            fields = MessageFields.parse(data)
            address = fields.string(1)
            value = fields.bytes(2)
            change_type = fields.varint(3)
        except SerializationError as err:
            raise SerializationError("Unable to get StateChange from bytes") from err
        if change_type == _ChangeType.SET:
            return StateChangeSet(key=address, value=value)
        if change_type == _ChangeType.DELETE:
            return StateChangeDelete(key=address)
        raise InvalidTypeError(
            "Cannot convert StateChange with type unset. "
            "StageChange type must be StateChange_Type::SET or StateChange_Type::DELETE."
        )


@dataclass(frozen=True, repr=False)
class StateChangeSet(StateChange):
    """Set ``key`` to ``value``."""

    key: str
    value: bytes
    _change_type = _ChangeType.SET

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))

    def _value(self) -> bytes:
        return self.value

    def __repr__(self) -> str:
        count = len(self.value)
        return (
            f"StateChange{{ key: {_quote(self.key)}, "
            f"value: <{count} byte{'' if count == 1 else 's'}> }}"
        )


@dataclass(frozen=True, repr=False)
class StateChangeDelete(StateChange):
    """Delete ``key``."""

    key: str
    _change_type = _ChangeType.DELETE

    def __repr__(self) -> str:
        return f"StateChange::Delete{{ key: {_quote(self.key)} }})"