"""Builders for events and transaction receipts."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from transactkit.receipt import Event, TransactionReceipt
from transactkit.state_change import StateChange


class _MissingFieldError(Exception):
    """Base for builder errors raised when a required field was never set."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"MissingField: {self.message}"


class EventBuilderError(_MissingFieldError):
    """Raised when an event cannot be built."""


class TransactionReceiptBuilderError(_MissingFieldError):
    """Raised when a transaction receipt cannot be built."""


@dataclass(frozen=True)
class EventBuilder:
    """Collects the parts of an event; each ``with_`` call returns a new builder."""

    event_type: Optional[str] = None
    attributes: tuple[tuple[str, str], ...] = ()
    data: bytes = b""

    def with_event_type(self, event_type: str) -> EventBuilder:
        return replace(self, event_type=event_type)

    def with_attributes(self, attributes: Iterable[tuple[str, str]]) -> EventBuilder:
        return replace(self, attributes=tuple((key, value) for key, value in attributes))

    def with_data(self, data: bytes) -> EventBuilder:
        return replace(self, data=bytes(data))

    def build(self) -> Event:
        if self.event_type is None:
            raise EventBuilderError("'event_type' field is required")
        return Event(event_type=self.event_type, attributes=self.attributes, data=self.data)


@dataclass(frozen=True)
class TransactionReceiptBuilder:
    """Collects the parts of a transaction receipt; each ``with_`` call returns a new builder."""

    state_changes: tuple[StateChange, ...] = ()
    events: tuple[Event, ...] = ()
    data: tuple[bytes, ...] = ()
    transaction_id: Optional[str] = None

    def with_state_changes(self, state_changes: Iterable[StateChange]) -> TransactionReceiptBuilder:
        return replace(self, state_changes=tuple(state_changes))

    def with_events(self, events: Iterable[Event]) -> TransactionReceiptBuilder:
        return replace(self, events=tuple(events))

    def with_data(self, data: Iterable[bytes]) -> TransactionReceiptBuilder:
        return replace(self, data=tuple(bytes(item) for item in data))

    def with_transaction_id(self, transaction_id: str) -> TransactionReceiptBuilder:
        return replace(self, transaction_id=transaction_id)

    def build(self) -> TransactionReceipt:
        if self.transaction_id is None:
            raise TransactionReceiptBuilderError("'transaction_id' field is required")
        return TransactionReceipt(
            state_changes=self.state_changes,
            events=self.events,
            data=self.data,
            transaction_id=self.transaction_id,
        )