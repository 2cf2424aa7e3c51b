"""Transactions, batches, receipts and commands with a protobuf wire format."""

__version__ = "0.1.0"