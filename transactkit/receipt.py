"""Transaction receipts and the events fired while processing transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from transactkit.protos import MessageFields, MessageWriter, SerializationError
from transactkit.state_change import StateChange


@dataclass(frozen=True)
class Event:
    """Metadata about a transaction's processing; not verified or saved to state."""

    event_type: str
    attributes: tuple[tuple[str, str], ...]
    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "attributes", tuple((key, value) for key, value in self.attributes)
        )
        object.__setattr__(self, "data", bytes(self.data))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.event_type:
            writer.string(1, self.event_type)
        for key, value in self.attributes:
            attribute = MessageWriter()
            if key:
                attribute.string(1, key)
            if value:
                attribute.string(2, value)
            writer.bytes(2, attribute.getvalue())
        if self.data:
            writer.bytes(3, self.data)
        return writer.getvalue()

    @classmethod
    def _from_fields(cls, fields: MessageFields) -> Event:
        attributes = []
        for raw in fields.repeated_bytes(2):
            attribute = MessageFields.parse(raw)
            attributes.append((attribute.string(1), attribute.string(2)))
        return cls(event_type=fields.string(1), attributes=attributes, data=fields.bytes(3))

    @classmethod
    def from_bytes(cls, data: bytes) -> Event:
        try:
            return cls._from_fields(MessageFields.parse(data))
        except SerializationError as err:
            raise SerializationError("Unable to get TransactionReceipt from bytes") from err


@dataclass(frozen=True)
class TransactionReceipt:
    """The state changes, events and data produced by a valid transaction."""

    state_changes: tuple[StateChange, ...]
    events: tuple[Event, ...]
    data: tuple[bytes, ...]
    transaction_id: str

    def __init__(
        self,
        state_changes: Iterable[StateChange],
        events: Iterable[Event],
        data: Iterable[bytes],
        transaction_id: str,
    ) -> None:
        object.__setattr__(self, "state_changes", tuple(state_changes))
        object.__setattr__(self, "events", tuple(events))
        object.__setattr__(self, "data", tuple(bytes(item) for item in data))
        object.__setattr__(self, "transaction_id", transaction_id)

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        for change in self.state_changes:
            writer.bytes(1, change.to_bytes())
        for event in self.events:
            writer.bytes(2, event.to_bytes())
        for item in self.data:
            writer.bytes(3, item)
        if self.transaction_id:
            writer.string(4, self.transaction_id)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> TransactionReceipt:
        """Decode a receipt; a state change without a type raises InvalidTypeError."""
        try:
            fields = MessageFields.parse(data)
            state_changes = [StateChange.from_bytes(raw) for raw in fields.repeated_bytes(1)]
            events = [
                Event._from_fields(MessageFields.parse(raw)) for raw in fields.repeated_bytes(2)
            ]
            receipt_data = fields.repeated_bytes(3)
            transaction_id = fields.string(4)
        except SerializationError as err:
            raise SerializationError("Unable to get TransactionReceipt from bytes") from err
        return cls(
            state_changes=state_changes,
            events=events,
            data=receipt_data,
            transaction_id=transaction_id,
        )