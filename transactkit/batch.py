"""Batches: signed collections of transactions that succeed or fail together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from transactkit.protos import (
    DeserializationError,
    MessageFields,
    MessageWriter,
    ProtoConversionError,
    SerializationError,
)
from transactkit.transaction import BuildErrorKind, Transaction, _decode_hex


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _byte_count(length: int) -> str:
    return f"<{length} byte{'' if length == 1 else 's'}>"


class BatchBuildError(Exception):
    """Raised when a batch or its pair cannot be built."""

    def __init__(self, kind: BuildErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True, repr=False)
class BatchHeader:
    signer_public_key: bytes
    transaction_ids: tuple[bytes, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "signer_public_key", bytes(self.signer_public_key))
        object.__setattr__(
            self, "transaction_ids", tuple(bytes(item) for item in self.transaction_ids)
        )

    def __repr__(self) -> str:
        ids = ", ".join(_quote(item.hex()) for item in self.transaction_ids)
        return (
            "BatchHeader{ "
            f"signer_public_key: {_quote(self.signer_public_key.hex())}, "
            f"transaction_ids: [{ids}]"
            " }"
        )

    def to_bytes(self) -> bytes:
        """Encode the header; the key and transaction ids are written as hex strings."""
        writer = MessageWriter()
        if self.signer_public_key:
            writer.string(1, self.signer_public_key.hex())
        for transaction_id in self.transaction_ids:
            writer.string(2, transaction_id.hex())
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> BatchHeader:
        try:
            fields = MessageFields.parse(data)
            signer_public_key = fields.string(1)
            transaction_ids = fields.repeated_strings(2)
        except SerializationError as err:
            raise SerializationError(
                f"unable to get BatchHeader from bytes: {err.message}"
            ) from err
        return cls(
            signer_public_key=_decode_hex(signer_public_key),
            transaction_ids=tuple(_decode_hex(item) for item in transaction_ids),
        )


@dataclass(frozen=True, repr=False)
class Batch:
    header: bytes
    header_signature: str
    transactions: tuple[Transaction, ...]
    trace: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", bytes(self.header))
        object.__setattr__(self, "transactions", tuple(self.transactions))
        object.__setattr__(self, "trace", bool(self.trace))

    def __repr__(self) -> str:
        transactions = ", ".join(repr(txn) for txn in self.transactions)
        return (
            "Batch{ "
            f"header_signature: {_quote(self.header_signature)}, "
            f"header: {_byte_count(len(self.header))},  "
            f"transactions: [{transactions}], "
            f"trace: {'true' if self.trace else 'false'}"
            " }"
        )

    def to_bytes(self) -> bytes:
        writer = MessageWriter()
        if self.header:
            writer.bytes(1, self.header)
        if self.header_signature:
            writer.string(2, self.header_signature)
        for transaction in self.transactions:
            writer.bytes(3, transaction.to_bytes())
        if self.trace:
            writer.varint(4, 1)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> Batch:
        try:
            fields = MessageFields.parse(data)
            header = fields.bytes(1)
            header_signature = fields.string(2)
            transactions = [Transaction.from_bytes(raw) for raw in fields.repeated_bytes(3)]
            trace = fields.varint(4) != 0
        except SerializationError as err:
            raise SerializationError(f"unable to get Batch from bytes: {err.message}") from err
        return cls(
            header=header,
            header_signature=header_signature,
            transactions=transactions,
            trace=trace,
        )

    def into_pair(self) -> BatchPair:
        """Pair the batch with its decoded header."""
        try:
            header = BatchHeader.from_bytes(self.header)
        except ProtoConversionError as err:
            raise BatchBuildError(BuildErrorKind.DESERIALIZATION, str(err)) from err
        return BatchPair(batch=self, header=header)


@dataclass(frozen=True)
class BatchPair:
    batch: Batch
    header: BatchHeader

    def take(self) -> tuple[Batch, BatchHeader]:
        return self.batch, self.header

    def to_bytes(self) -> bytes:
        return self.batch.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> BatchPair:
        batch = Batch.from_bytes(data)
        try:
            return batch.into_pair()
        except BatchBuildError as err:
            raise DeserializationError(str(err)) from err


def _batches_from_list(data: bytes) -> Iterable[Batch]:
    try:
        fields = MessageFields.parse(data)
        return [Batch.from_bytes(raw) for raw in fields.repeated_bytes(1)]
    except SerializationError as err:
        raise SerializationError(f"unable to get BatchList from bytes: {err.message}") from err


def batches_from_bytes(data: bytes) -> list[Batch]:
    """Decode a list of batches."""
    return list(_batches_from_list(data))


def batch_pairs_from_bytes(data: bytes) -> list[BatchPair]:
    """Decode a list of batches, pairing each with its decoded header."""
    pairs = []
    for batch in _batches_from_list(data):
        try:
            pairs.append(batch.into_pair())
        except BatchBuildError as err:
            raise DeserializationError(f"failed to get BatchPair from Batch: {err}") from err
    return pairs