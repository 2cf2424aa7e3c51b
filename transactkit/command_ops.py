"""Commands that add events and receipt data, or sleep."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable

from transactkit.command_state import BytesEntry
from transactkit.protos import MessageFields, MessageWriter, SerializationError

_UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class AddEvent:
    """Fire an event with the given type, attributes and data."""

    event_type: str
    attributes: tuple[BytesEntry, ...]
    data: bytes

    def __init__(self, event_type: str, attributes: Iterable[BytesEntry], data: bytes) -> None:
        object.__setattr__(self, "event_type", event_type)
        object.__setattr__(self, "attributes", tuple(attributes))
        object.__setattr__(self, "data", bytes(data))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.event_type:
            writer.string(1, self.event_type)
        for entry in self.attributes:
            writer.bytes(2, entry.to_bytes())
        if self.data:
            writer.bytes(3, self.data)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> AddEvent:
        try:
            fields = MessageFields.parse(data)
            attributes = []
            for raw in fields.repeated_bytes(2):
                entry = MessageFields.parse(raw)
                attributes.append(BytesEntry(key=entry.string(1), value=entry.bytes(2)))
            return cls(fields.string(1), attributes, fields.bytes(3))
        except SerializationError as err:
            raise SerializationError("Unable to get AddEvent from bytes") from err


@dataclass(frozen=True)
class AddReceiptData:
    """Append opaque data to the transaction receipt."""

    receipt_data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "receipt_data", bytes(self.receipt_data))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.receipt_data:
            writer.bytes(1, self.receipt_data)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> AddReceiptData:
        try:
            return cls(MessageFields.parse(data).bytes(1))
        except SerializationError as err:
            raise SerializationError("Unable to get AddReceiptData from bytes") from err


class SleepType(enum.IntEnum):
    """How a sleep command waits."""

    WAIT = 0
    BUSY_WAIT = 1


@dataclass(frozen=True)
class Sleep:
    """Pause execution for a number of milliseconds."""

    duration_millis: int
    sleep_type: SleepType

    def __post_init__(self) -> None:
        if not 0 <= self.duration_millis <= _UINT32_MAX:
            raise ValueError(f"duration_millis out of range: {self.duration_millis}")
        object.__setattr__(self, "sleep_type", SleepType(self.sleep_type))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.duration_millis:
            writer.varint(1, self.duration_millis)
        if self.sleep_type != SleepType.WAIT:
            writer.varint(2, int(self.sleep_type))
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> Sleep:
        try:
            fields = MessageFields.parse(data)
            duration = fields.varint(1) & _UINT32_MAX
            raw_type = fields.varint(2)
            try:
                sleep_type = SleepType(raw_type)
            except ValueError as err:
                raise SerializationError(f"unknown sleep type {raw_type}") from err
        except SerializationError as err:
            raise SerializationError("Unable to get bytes from Sleep") from err
        return cls(duration_millis=duration, sleep_type=sleep_type)