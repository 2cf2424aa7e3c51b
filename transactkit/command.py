"""Commands for the command transaction family and the payload that carries them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Union

from transactkit.command_ops import AddEvent, AddReceiptData, Sleep
from transactkit.command_state import DeleteState, GetState, SetState
from transactkit.protos import InvalidTypeError, MessageFields, MessageWriter, SerializationError


@dataclass(frozen=True)
class ReturnInvalid:
    """Make the transaction fail as invalid with the given message."""

    error_message: str

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.error_message:
            writer.string(1, self.error_message)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> ReturnInvalid:
        try:
            return cls(MessageFields.parse(data).string(1))
        except SerializationError as err:
            raise SerializationError("Unable to get ReturnInvalid from bytes") from err


@dataclass(frozen=True)
class ReturnInternalError:
    """Make the transaction fail with an internal error carrying the given message."""

    error_message: str

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.error_message:
            writer.string(1, self.error_message)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> ReturnInternalError:
        try:
            return cls(MessageFields.parse(data).string(1))
        except SerializationError as err:
            raise SerializationError("Unable to get ReturnInvalid from bytes") from err


Command = Union[
    SetState,
    DeleteState,
    GetState,
    AddEvent,
    AddReceiptData,
    Sleep,
    ReturnInvalid,
    ReturnInternalError,
]


class _CommandType(enum.IntEnum):
    UNSET = 0
    SET_STATE = 1
    DELETE_STATE = 2
    GET_STATE = 3
    ADD_EVENT = 4
    ADD_RECEIPT_DATA = 5
    SLEEP = 6
    RETURN_INVALID = 7
    RETURN_INTERNAL_ERROR = 8


# command class -> (command type, field number of its message)
_ENCODING: dict[type, tuple[_CommandType, int]] = {
    SetState: (_CommandType.SET_STATE, 2),
    DeleteState: (_CommandType.DELETE_STATE, 3),
    GetState: (_CommandType.GET_STATE, 4),
    AddEvent: (_CommandType.ADD_EVENT, 5),
    AddReceiptData: (_CommandType.ADD_RECEIPT_DATA, 6),
    Sleep: (_CommandType.SLEEP, 7),
    ReturnInvalid: (_CommandType.RETURN_INVALID, 8),
    ReturnInternalError: (_CommandType.RETURN_INTERNAL_ERROR, 9),
}

_DECODING: dict[_CommandType, tuple[type, int]] = {
    command_type: (cls, field) for cls, (command_type, field) in _ENCODING.items()
}


def command_to_bytes(command: Command) -> bytes:
    """Encode a command together with its type tag."""
    try:
        command_type, field = _ENCODING[type(command)]
    except KeyError:
        raise InvalidTypeError(f"not a command: {type(command).__name__}") from None
    writer = MessageWriter()
    writer.varint(1, int(command_type))
    writer.bytes(field, command.to_bytes())
    return writer.getvalue()


def _command_from_fields(fields: MessageFields) -> Command:
    raw_type = fields.varint(1)
    if raw_type == _CommandType.UNSET:
        raise InvalidTypeError("Cannot convert Command_CommandType with type unset.")
    try:
        command_type = _CommandType(raw_type)
    except ValueError:
        raise SerializationError(f"unknown command type {raw_type}") from None
    cls, field = _DECODING[command_type]
    return cls.from_bytes(fields.bytes(field))


def command_from_bytes(data: bytes) -> Command:
    """Decode a command; a command without a type raises InvalidTypeError."""
    try:
        return _command_from_fields(MessageFields.parse(data))
    except SerializationError as err:
        raise SerializationError("Unable to get Command from bytes") from err


@dataclass(frozen=True)
class CommandPayload:
    """An ordered list of commands to execute."""

    commands: tuple[Command, ...]

    def __init__(self, commands: Iterable[Command]) -> None:
        object.__setattr__(self, "commands", tuple(commands))

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        for command in self.commands:
            writer.bytes(1, command_to_bytes(command))
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> CommandPayload:
        try:
            fields = MessageFields.parse(data)
            commands = [
                _command_from_fields(MessageFields.parse(raw))
                for raw in fields.repeated_bytes(1)
            ]
        except SerializationError as err:
            raise SerializationError("Unable to get CommandPayload from byte") from err
        return cls(commands)