# transactkit

Data types for a transaction-processing system: transactions, batches of
transactions, execution receipts with state changes and events, and the
commands of a command-driven smart-contract family. Every type converts to and
from a protobuf wire format, using only the standard library.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Transactions

`transactkit.transaction` holds `TransactionHeader`, `Transaction` and
`TransactionPair`. Keys, dependencies, inputs, outputs and the payload hash are
held as bytes and written on the wire as hex strings; the nonce must be valid
UTF-8.

```python
import hashlib

from transactkit.transaction import HashMethod, Transaction, TransactionHeader

payload = b"my_game,create,"
header = TransactionHeader(
    batcher_public_key=bytes.fromhex("0102"),
    dependencies=[],
    family_name="xo",
    family_version="1.0",
    inputs=[bytes.fromhex("5b7349")],
    outputs=[bytes.fromhex("5b7349")],
    nonce=b"f9kdzz",
    payload_hash=hashlib.sha512(payload).digest(),
    payload_hash_method=HashMethod.SHA512,
    signer_public_key=bytes.fromhex("0102"),
)
transaction = Transaction(header.to_bytes(), "ab" * 64, payload)
pair = transaction.into_pair()          # decodes the header again
transaction, header = pair.take()
```

`Transaction.into_pair` raises `TransactionBuildError` (with
`kind == BuildErrorKind.DESERIALIZATION`) when the header bytes cannot be
decoded.

## Batches

`transactkit.batch` holds `BatchHeader`, `Batch`, `BatchPair` and
`BatchBuildError`.

```python
from transactkit.batch import Batch, BatchHeader, batch_pairs_from_bytes

batch_header = BatchHeader(
    signer_public_key=bytes.fromhex("0102"),
    transaction_ids=[bytes.fromhex(transaction.header_signature)],
)
batch = Batch(batch_header.to_bytes(), "cd" * 64, [transaction], trace=False)
restored = Batch.from_bytes(batch.to_bytes()).into_pair()
```

`batches_from_bytes` and `batch_pairs_from_bytes` read a serialised batch
list (batches in repeated field 1).

## Receipts and events

`transactkit.state_change` holds `StateChange` with its two kinds,
`StateChangeSet` and `StateChangeDelete`. `transactkit.receipt` holds `Event`
and `TransactionReceipt`; `transactkit.receipt_builder` holds `EventBuilder`
and `TransactionReceiptBuilder`, whose `with_` methods each return a new
builder.

```python
from transactkit.receipt import TransactionReceipt
from transactkit.receipt_builder import EventBuilder, TransactionReceiptBuilder
from transactkit.state_change import StateChangeSet

event = EventBuilder().with_event_type("xo/created").with_data(b"...").build()
receipt = (
    TransactionReceiptBuilder()
    .with_state_changes([StateChangeSet(key="5b7349", value=b"state")])
    .with_events([event])
    .with_transaction_id(transaction.header_signature)
    .build()
)
assert TransactionReceipt.from_bytes(receipt.to_bytes()) == receipt
```

`build()` raises `EventBuilderError` without an event type and
`TransactionReceiptBuilderError` without a transaction id.

## Commands

`transactkit.command_state` holds `BytesEntry`, `SetState`, `GetState` and
`DeleteState`; `transactkit.command_ops` holds `AddEvent`, `AddReceiptData`,
`SleepType` and `Sleep`; `transactkit.command` holds `ReturnInvalid`,
`ReturnInternalError` and `CommandPayload`, which carries a list of commands.
`command_to_bytes` and `command_from_bytes` convert a single command together
with its type tag.

## Wire format and errors

`transactkit.protos` provides `MessageWriter` and `MessageFields`, a small
protobuf encoder and parser used by all the types above. Decoding problems
raise subclasses of `ProtoConversionError`: `DeserializationError`,
`SerializationError` (malformed bytes, bad hex, invalid UTF-8) and
`InvalidTypeError` (a state change or command with no type set).

## What this package does not do

The package does not sign or hash anything for you and has no builders for
transactions or batches: you compute the payload hash, produce the header
signatures with your own keys, and construct `TransactionHeader`,
`Transaction`, `BatchHeader` and `Batch` yourself. It does not verify
signatures, schedule or execute transactions, or store state.