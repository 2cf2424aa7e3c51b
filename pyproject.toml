[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "transactkit"
version = "0.1.0"
description = "Transactions, batches, receipts and commands with a compact protobuf wire format"
requires-python = ">=3.10"
dependencies = []
keywords = ["transactions", "batches", "receipts", "protobuf", "distributed ledger"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["transactkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
