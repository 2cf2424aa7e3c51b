import pytest

from transactkit.command_state import BytesEntry, DeleteState, GetState, SetState
from transactkit.protos import SerializationError

TRUNCATED = b"\x0a\x05ab"


def test_bytes_entry_round_trip():
    entry = BytesEntry("address", b"\x00\x01\xff")
    decoded = BytesEntry.from_bytes(entry.to_bytes())
    assert decoded == entry
    assert decoded.key == "address"
    assert decoded.value == b"\x00\x01\xff"


def test_bytes_entry_wire_bytes():
    assert BytesEntry("a", b"\x01").to_bytes() == b"\x0a\x01a\x12\x01\x01"


def test_empty_bytes_entry_encodes_to_nothing():
    entry = BytesEntry("", b"")
    assert entry.to_bytes() == b""
    assert BytesEntry.from_bytes(b"") == entry


def test_bytes_entry_malformed():
    with pytest.raises(SerializationError) as info:
        BytesEntry.from_bytes(TRUNCATED)
    assert info.value.message == "Unable to get BytesEntry from bytes"


def test_bytes_entry_wrong_wire_type():
    with pytest.raises(SerializationError):
        BytesEntry.from_bytes(b"\x08\x01")


def test_set_state_round_trip_keeps_order():
    writes = [BytesEntry("one", b"\x01"), BytesEntry("two", b"\x02\x03"), BytesEntry("one", b"")]
    decoded = SetState.from_bytes(SetState(writes).to_bytes())
    assert decoded.state_writes == tuple(writes)


def test_set_state_empty():
    assert SetState.from_bytes(SetState([]).to_bytes()).state_writes == ()


def test_set_state_malformed_nested_entry():
    with pytest.raises(SerializationError) as info:
        SetState.from_bytes(b"\x0a\x02\x08\x01")
    assert info.value.message == "Unable to get SetState from bytes"


def test_delete_state_round_trip():
    state = DeleteState(["k1", "k2", "k3"])
    decoded = DeleteState.from_bytes(state.to_bytes())
    assert isinstance(decoded, DeleteState)
    assert decoded.state_keys == ("k1", "k2", "k3")


def test_delete_state_wire_bytes():
    assert DeleteState(["k"]).to_bytes() == b"\x0a\x01k"


def test_get_state_round_trip():
    state = GetState(["abc", "def"])
    decoded = GetState.from_bytes(state.to_bytes())
    assert isinstance(decoded, GetState)
    assert decoded == state


def test_get_and_delete_share_encoding():
    keys = ["x", "y"]
    assert GetState(keys).to_bytes() == DeleteState(keys).to_bytes()
    assert GetState.from_bytes(DeleteState(keys).to_bytes()).state_keys == ("x", "y")


@pytest.mark.parametrize("cls", [DeleteState, GetState])
def test_state_keys_malformed(cls):
    with pytest.raises(SerializationError) as info:
        cls.from_bytes(TRUNCATED)
    assert info.value.message == f"Unable to get {cls.__name__} from bytes"


@pytest.mark.parametrize("cls", [DeleteState, GetState])
def test_state_keys_invalid_utf8(cls):
    with pytest.raises(SerializationError):
        cls.from_bytes(b"\x0a\x01\xff")