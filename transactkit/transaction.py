"""Transactions: signed, opaque payloads executed as part of a batch."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence

from transactkit.protos import MessageFields, MessageWriter, ProtoConversionError, SerializationError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class HashMethod(enum.Enum):
    SHA512 = "SHA512"


class BuildErrorKind(enum.Enum):
    DESERIALIZATION = "DeserializationError"
    MISSING_FIELD = "MissingField"
    SERIALIZATION = "SerializationError"
    SIGNING = "SigningError"


class TransactionBuildError(Exception):
    """Raised when a transaction or its pair cannot be built."""

    def __init__(self, kind: BuildErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


def _decode_hex(text: str) -> bytes:
    if len(text) % 2:
        raise SerializationError("Odd number of digits")
    for position, char in enumerate(text):
        if char not in _HEX_DIGITS:
            raise SerializationError(f"Invalid character {char!r} at position {position}")
    return bytes.fromhex(text)


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _hex_list(name: str, items: Sequence[bytes]) -> str:
    return f"{name}: [" + ", ".join(_quote(item.hex()) for item in items) + "], "


def _byte_count(length: int) -> str:
    return f"<{length} byte{'' if length == 1 else 's'}>"


def _put_string(writer: MessageWriter, field: int, value: str) -> None:
    if value:
        writer.string(field, value)


@dataclass(frozen=True, repr=False)
class TransactionHeader:
    batcher_public_key: bytes
    dependencies: tuple[bytes, ...]
    family_name: str
    family_version: str
    inputs: tuple[bytes, ...]
    outputs: tuple[bytes, ...]
    nonce: bytes
    payload_hash: bytes
    payload_hash_method: HashMethod
    signer_public_key: bytes

    def __post_init__(self) -> None:
        for name in ("batcher_public_key", "nonce", "payload_hash", "signer_public_key"):
            object.__setattr__(self, name, bytes(getattr(self, name)))
        for name in ("dependencies", "inputs", "outputs"):
            object.__setattr__(self, name, tuple(bytes(item) for item in getattr(self, name)))

    def __repr__(self) -> str:
        return (
            "TransactionHeader{ "
            f"family_name: {_quote(self.family_name)}, "
            f"family_version: {_quote(self.family_version)}, "
            f"{_hex_list('inputs', self.inputs)}"
            f"{_hex_list('outputs', self.outputs)}"
            f"signer_public_key: {_quote(self.signer_public_key.hex())}, "
            f"payload_hash: {_quote(self.payload_hash.hex())}, "
            f"payload_hash_method: {self.payload_hash_method.name}, "
            f"nonce: {_quote(self.nonce.hex())}"
            " }"
        )

    def to_bytes(self) -> bytes:
        """Encode the header; keys and hashes are written as hex strings."""
        try:
            nonce = self.nonce.decode("utf-8")
        except UnicodeDecodeError as err:
            raise SerializationError(str(err)) from err
        writer = MessageWriter()
        _put_string(writer, 1, self.batcher_public_key.hex())
        for dependency in self.dependencies:
            writer.string(2, dependency.hex())
        _put_string(writer, 3, self.family_name)
        _put_string(writer, 4, self.family_version)
        for item in self.inputs:
            writer.string(5, item.hex())
        _put_string(writer, 6, nonce)
        for item in self.outputs:
            writer.string(7, item.hex())
        _put_string(writer, 9, self.payload_hash.hex())
        _put_string(writer, 10, self.signer_public_key.hex())
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> TransactionHeader:
        try:
            fields = MessageFields.parse(data)
            batcher_public_key = fields.string(1)
            dependencies = fields.repeated_strings(2)
            family_name = fields.string(3)
            family_version = fields.string(4)
            inputs = fields.repeated_strings(5)
            nonce = fields.string(6)
            outputs = fields.repeated_strings(7)
            payload_sha512 = fields.string(9)
            signer_public_key = fields.string(10)
        except SerializationError as err:
            raise SerializationError(
                f"unable to get TransactionHeader from bytes: {err.message}"
            ) from err
        return cls(
            batcher_public_key=_decode_hex(batcher_public_key),
            dependencies=tuple(_decode_hex(item) for item in dependencies),
            family_name=family_name,
            family_version=family_version,
            inputs=tuple(_decode_hex(item) for item in inputs),
            outputs=tuple(_decode_hex(item) for item in outputs),
            nonce=nonce.encode("utf-8"),
            payload_hash=_decode_hex(payload_sha512),
            payload_hash_method=HashMethod.SHA512,
            signer_public_key=_decode_hex(signer_public_key),
        )


@dataclass(frozen=True, repr=False)
class Transaction:
    header: bytes
    header_signature: str
    payload: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", bytes(self.header))
        object.__setattr__(self, "payload", bytes(self.payload))

    def __repr__(self) -> str:
        return (
            "Transaction {"
            f"header_signature: {_quote(self.header_signature)}, "
            f"header: {_byte_count(len(self.header))},  "
            f"payload: {_byte_count(len(self.payload))}"
            " }"
        )

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.header:
            writer.bytes(1, self.header)
        _put_string(writer, 2, self.header_signature)
        if self.payload:
            writer.bytes(3, self.payload)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> Transaction:
        try:
            fields = MessageFields.parse(data)
            return cls(fields.bytes(1), fields.string(2), fields.bytes(3))
        except SerializationError as err:
            raise SerializationError(
                f"unable to get Transaction from bytes: {err.message}"
            ) from err

    def into_pair(self) -> TransactionPair:
        """Pair the transaction with its decoded header."""
        try:
            header = TransactionHeader.from_bytes(self.header)
        except ProtoConversionError as err:
            raise TransactionBuildError(BuildErrorKind.DESERIALIZATION, str(err)) from err
        return TransactionPair(transaction=self, header=header)


@dataclass(frozen=True)
class TransactionPair:
    transaction: Transaction
    header: TransactionHeader

    def take(self) -> tuple[Transaction, TransactionHeader]:
        return self.transaction, self.header