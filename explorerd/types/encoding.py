"""
Text encoding of Sia identifiers.

Identifiers are 32-byte hashes rendered as lower-case hex behind a short type
prefix (addr:, txid:, bid:). The prefix is optional on input and always
present on output. ElementIDs append the output index to the source hash
(elem:<hex>:<index>) and chain indexes join height and block ID with "::".

All parse_* functions raise ValueError on malformed input and return the
normalized text form.
"""

from __future__ import annotations

import re

HASH_HEX_LEN = 64

ADDRESS_PREFIX = "addr"
TRANSACTION_ID_PREFIX = "txid"
BLOCK_ID_PREFIX = "bid"
ELEMENT_ID_PREFIX = "elem"

# Literal accepted in place of a chain index: "latest"
TIP_LITERAL = "tip"

_HEX_RE = re.compile(r"^[0-9a-fA-F]{%d}$" % HASH_HEX_LEN)


def _parse_prefixed_hash(value: str, prefix: str, kind: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{kind} must be a string")
    raw = value.strip()
    if raw.startswith(prefix + ":"):
        raw = raw[len(prefix) + 1 :]
    if not _HEX_RE.match(raw):
        raise ValueError(f"invalid {kind} {value!r}: expected {HASH_HEX_LEN} hex characters")
    return f"{prefix}:{raw.lower()}"


def parse_address(value: str) -> str:
    """Parse an address ("addr:<hex>" or bare hex)."""
    return _parse_prefixed_hash(value, ADDRESS_PREFIX, "address")


def parse_transaction_id(value: str) -> str:
    return _parse_prefixed_hash(value, TRANSACTION_ID_PREFIX, "transaction ID")


def parse_block_id(value: str) -> str:
    return _parse_prefixed_hash(value, BLOCK_ID_PREFIX, "block ID")


def parse_element_id(value: str) -> str:
    """
    Parse an element ID: "elem:<source hex>:<index>".

    The prefix may be omitted ("<source hex>:<index>"). The index is a
    non-negative decimal integer.
    """
    if not isinstance(value, str):
        raise ValueError("element ID must be a string")
    raw = value.strip()
    if raw.startswith(ELEMENT_ID_PREFIX + ":"):
        raw = raw[len(ELEMENT_ID_PREFIX) + 1 :]
    source, sep, index = raw.rpartition(":")
    if not sep or not _HEX_RE.match(source) or not index.isdigit():
        raise ValueError(f"invalid element ID {value!r}: expected elem:<hex>:<index>")
    return f"{ELEMENT_ID_PREFIX}:{source.lower()}:{int(index)}"


def split_chain_index(value: str) -> tuple[int, str]:
    """Split "<height>::<block id>" into (height, normalized block ID)."""
    if not isinstance(value, str):
        raise ValueError("chain index must be a string")
    height_str, sep, block_id = value.strip().partition("::")
    if not sep:
        raise ValueError(f"invalid chain index {value!r}: expected <height>::<block id>")
    if not height_str.isdigit():
        raise ValueError(f"invalid chain index height {height_str!r}")
    return int(height_str), parse_block_id(block_id)


def format_chain_index(height: int, block_id: str) -> str:
    return f"{height}::{block_id}"
