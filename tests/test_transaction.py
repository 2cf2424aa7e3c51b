import pytest

from transactkit.protos import MessageWriter, SerializationError
from transactkit.transaction import (
    BuildErrorKind,
    HashMethod,
    Transaction,
    TransactionBuildError,
    TransactionHeader,
    TransactionPair,
)

FAMILY_NAME = "test_family"
FAMILY_VERSION = "0.1"
KEY1 = "111111111111111111111111111111111111111111111111111111111111111111"
KEY2 = "222222222222222222222222222222222222222222222222222222222222222222"
KEY3 = "333333333333333333333333333333333333333333333333333333333333333333"
KEY4 = "444444444444444444444444444444444444444444444444444444444444444444"
KEY5 = "555555555555555555555555555555555555555555555555555555555555555555"
KEY6 = "666666666666666666666666666666666666666666666666666666666666666666"
KEY7 = "777777777777777777777777777777777777777777777777777777777777777777"
KEY8 = "888888888888888888888888888888888888888888888888888888888888888888"
NONCE = "f9kdzz"
HASH = "0000000000000000000000000000000000000000000000000000000000000000"
BYTES1 = bytes([0x01, 0x02, 0x03, 0x04])
BYTES2 = bytes([0x05, 0x06, 0x07, 0x08])
SIGNATURE1 = "sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1sig1"


def make_header(**overrides):
    values = dict(
        batcher_public_key=bytes.fromhex(KEY1),
        dependencies=[bytes.fromhex(KEY2), bytes.fromhex(KEY3)],
        family_name=FAMILY_NAME,
        family_version=FAMILY_VERSION,
        inputs=[bytes.fromhex(KEY4), bytes.fromhex(KEY5[0:4])],
        nonce=NONCE.encode(),
        outputs=[bytes.fromhex(KEY6), bytes.fromhex(KEY7[0:4])],
        payload_hash=bytes.fromhex(HASH),
        payload_hash_method=HashMethod.SHA512,
        signer_public_key=bytes.fromhex(KEY8),
    )
    values.update(overrides)
    return TransactionHeader(**values)


def test_transaction_header_fields():
    header = make_header()
    assert header.batcher_public_key.hex() == KEY1
    assert list(header.dependencies) == [bytes.fromhex(KEY2), bytes.fromhex(KEY3)]
    assert header.family_name == FAMILY_NAME
    assert header.family_version == FAMILY_VERSION
    assert list(header.inputs) == [bytes.fromhex(KEY4), bytes.fromhex(KEY5[0:4])]
    assert list(header.outputs) == [bytes.fromhex(KEY6), bytes.fromhex(KEY7[0:4])]
    assert header.payload_hash.hex() == HASH
    assert header.payload_hash_method == HashMethod.SHA512
    assert header.signer_public_key.hex() == KEY8


def test_transaction_header_bytes():
    original = make_header()
    header = TransactionHeader.from_bytes(original.to_bytes())
    assert header.batcher_public_key.hex() == original.batcher_public_key.hex()
    assert header.dependencies == original.dependencies
    assert header.family_name == original.family_name
    assert header.family_version == original.family_version
    assert header.inputs == original.inputs
    assert header.outputs == original.outputs
    assert header.payload_hash.hex() == original.payload_hash.hex()
    assert header.payload_hash_method == original.payload_hash_method
    assert header.signer_public_key.hex() == original.signer_public_key.hex()
    assert header.nonce == NONCE.encode()
    assert header == original


def test_transaction_header_from_hex_string_message():
    data = (
        MessageWriter()
        .string(1, KEY1)
        .string(2, KEY2)
        .string(2, KEY3)
        .string(3, FAMILY_NAME)
        .string(4, FAMILY_VERSION)
        .string(5, KEY4)
        .string(5, KEY5[0:4])
        .string(6, NONCE)
        .string(7, KEY6)
        .string(7, KEY7[0:4])
        .string(9, HASH)
        .string(10, KEY8)
        .getvalue()
    )
    header = TransactionHeader.from_bytes(data)
    assert header.batcher_public_key.hex() == KEY1
    assert list(header.dependencies) == [bytes.fromhex(KEY2), bytes.fromhex(KEY3)]
    assert header.family_name == FAMILY_NAME
    assert header.family_version == FAMILY_VERSION
    assert list(header.inputs) == [bytes.fromhex(KEY4), bytes.fromhex(KEY5[0:4])]
    assert header.nonce.decode() == NONCE
    assert list(header.outputs) == [bytes.fromhex(KEY6), bytes.fromhex(KEY7[0:4])]
    assert header.payload_hash == bytes.fromhex(HASH)
    assert header.payload_hash_method == HashMethod.SHA512
    assert header.signer_public_key == bytes.fromhex(KEY8)
    assert header.to_bytes() == data


def test_empty_header_encodes_to_nothing():
    header = make_header(
        batcher_public_key=b"",
        dependencies=[],
        family_name="",
        family_version="",
        inputs=[],
        nonce=b"",
        outputs=[],
        payload_hash=b"",
        signer_public_key=b"",
    )
    assert header.to_bytes() == b""
    assert TransactionHeader.from_bytes(b"") == header


@pytest.mark.parametrize("bad_hex", ["zz", "abc"])
def test_header_with_invalid_hex_is_rejected(bad_hex):
    data = MessageWriter().string(1, bad_hex).getvalue()
    with pytest.raises(SerializationError):
        TransactionHeader.from_bytes(data)


def test_header_with_non_utf8_nonce_cannot_be_encoded():
    with pytest.raises(SerializationError):
        make_header(nonce=b"\xff\xfe").to_bytes()


def test_malformed_header_bytes_are_rejected():
    with pytest.raises(SerializationError) as info:
        TransactionHeader.from_bytes(b"\x0a\x05ab")
    assert "unable to get TransactionHeader from bytes" in str(info.value)


def test_transaction_fields():
    transaction = Transaction(BYTES1, SIGNATURE1, BYTES2)
    assert transaction.header == BYTES1
    assert transaction.header_signature == SIGNATURE1
    assert transaction.payload == BYTES2


def test_transaction_bytes_round_trip():
    transaction = Transaction(BYTES1, SIGNATURE1, BYTES2)
    restored = Transaction.from_bytes(transaction.to_bytes())
    assert restored == transaction
    assert hash(restored) == hash(transaction)


def test_transaction_from_hex_string_message():
    data = MessageWriter().bytes(1, BYTES1).string(2, SIGNATURE1).bytes(3, BYTES2).getvalue()
    transaction = Transaction.from_bytes(data)
    assert transaction.header == BYTES1
    assert transaction.header_signature == SIGNATURE1
    assert transaction.payload == BYTES2


def test_into_pair_decodes_header():
    header = make_header()
    transaction = Transaction(header.to_bytes(), SIGNATURE1, BYTES2)
    pair = transaction.into_pair()
    assert pair.header == header
    assert pair.transaction == transaction
    assert pair.take() == (transaction, header)
    assert pair == TransactionPair(transaction=transaction, header=header)


def test_into_pair_with_bad_header_is_a_deserialization_error():
    with pytest.raises(TransactionBuildError) as info:
        Transaction(BYTES1, SIGNATURE1, BYTES2).into_pair()
    assert info.value.kind is BuildErrorKind.DESERIALIZATION
    assert str(info.value).startswith("DeserializationError: ")


def test_build_error_message_format():
    error = TransactionBuildError(BuildErrorKind.MISSING_FIELD, "'payload' field is required")
    assert str(error) == "MissingField: 'payload' field is required"


def test_transaction_repr_shows_sizes():
    text = repr(Transaction(BYTES1, SIGNATURE1, b"\x01"))
    assert "header: <4 bytes>" in text
    assert "payload: <1 byte>" in text
    assert SIGNATURE1 in text