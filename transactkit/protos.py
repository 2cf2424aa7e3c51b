"""Protocol-buffer wire encoding and the conversion errors shared by the protocol types."""

from __future__ import annotations

import io

_WIRE_VARINT = 0
_WIRE_FIXED64 = 1
_WIRE_LENGTH = 2
_WIRE_FIXED32 = 5

_MAX_FIELD = (1 << 29) - 1
_UINT64 = 1 << 64


class ProtoConversionError(Exception):
    """Raised when a value cannot be converted to or from its wire form."""

    _prefix = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self._prefix}{self.message}"


class DeserializationError(ProtoConversionError):
    _prefix = "unable to deserialize during protobuf conversion: "


class SerializationError(ProtoConversionError):
    _prefix = "unable to serialize during protobuf conversion: "


class InvalidTypeError(ProtoConversionError):
    _prefix = "invalid type encountered during protobuf conversion: "


def _encode_varint(value: int) -> bytes:
    if value < 0:
        value += _UINT64
    if not 0 <= value < _UINT64:
        raise ValueError(f"varint value out of range: {value}")
    out = bytearray()
    while True:
        low = value & 0x7F
        value >>= 7
        if value:
            out.append(low | 0x80)
        else:
            out.append(low)
            return bytes(out)


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    for shift in range(0, 70, 7):
        if pos >= len(data):
            raise SerializationError("truncated varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result & (_UINT64 - 1), pos
    raise SerializationError("varint is longer than 10 bytes")


def _take(data: bytes, pos: int, length: int) -> tuple[bytes, int]:
    end = pos + length
    if end > len(data):
        raise SerializationError("unexpected end of message")
    return data[pos:end], end


class MessageWriter:
    """Writes fields of a protobuf message in wire format."""

    def __init__(self) -> None:
        self._out = io.BytesIO()

    def _tag(self, field: int, wire_type: int) -> None:
        if not 1 <= field <= _MAX_FIELD:
            raise ValueError(f"invalid field number: {field}")
        self._out.write(_encode_varint((field << 3) | wire_type))

    def varint(self, field: int, value: int) -> MessageWriter:
        """Write an integer field; negative values take the 64-bit two's complement."""
        self._tag(field, _WIRE_VARINT)
        self._out.write(_encode_varint(value))
        return self

    def bytes(self, field: int, value: bytes) -> MessageWriter:
        """Write a length-delimited field."""
        self._tag(field, _WIRE_LENGTH)
        self._out.write(_encode_varint(len(value)))
        self._out.write(value)
        return self

    def string(self, field: int, value: str) -> MessageWriter:
        """Write a UTF-8 string field."""
        return self.bytes(field, value.encode("utf-8"))

    def getvalue(self) -> bytes:
        return self._out.getvalue()


class MessageFields:
    """The fields of a parsed protobuf message, looked up by field number."""

    def __init__(self, fields: dict[int, list[tuple[int, int | bytes]]]) -> None:
        self._fields = fields

    @classmethod
    def parse(cls, data: bytes) -> MessageFields:
        """Parse wire-format bytes; raises SerializationError on malformed input."""
        data = bytes(data)
        fields: dict[int, list[tuple[int, int | bytes]]] = {}
        pos = 0
        while pos < len(data):
            key, pos = _read_varint(data, pos)
            field, wire_type = key >> 3, key & 0x07
            if field == 0:
                raise SerializationError("invalid field number 0")
            value: int | bytes
            if wire_type == _WIRE_VARINT:
                value, pos = _read_varint(data, pos)
            elif wire_type == _WIRE_FIXED64:
                raw, pos = _take(data, pos, 8)
                value = int.from_bytes(raw, "little")
            elif wire_type == _WIRE_LENGTH:
                length, pos = _read_varint(data, pos)
                value, pos = _take(data, pos, length)
            elif wire_type == _WIRE_FIXED32:
                raw, pos = _take(data, pos, 4)
                value = int.from_bytes(raw, "little")
            else:
                raise SerializationError(f"unsupported wire type {wire_type}")
            fields.setdefault(field, []).append((wire_type, value))
        return cls(fields)

    def _values(self, field: int, wire_type: int) -> list:
        entries = self._fields.get(field, [])
        for found, _ in entries:
            if found != wire_type:
                raise SerializationError(
                    f"field {field} has wire type {found}, expected {wire_type}"
                )
        return [value for _, value in entries]

    def varint(self, field: int, default: int = 0) -> int:
        values = self._values(field, _WIRE_VARINT)
        return values[-1] if values else default

    def bytes(self, field: int) -> bytes:
        values = self._values(field, _WIRE_LENGTH)
        return values[-1] if values else b""

    def string(self, field: int) -> str:
        return self._decode(field, self.bytes(field))

    def repeated_bytes(self, field: int) -> list[bytes]:
        return self._values(field, _WIRE_LENGTH)

    def repeated_strings(self, field: int) -> list[str]:
        return [self._decode(field, raw) for raw in self.repeated_bytes(field)]

    @staticmethod
    def _decode(field: int, raw: bytes) -> str:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise SerializationError(f"field {field} is not valid UTF-8") from err