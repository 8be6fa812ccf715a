"""
Node identifiers derived from a region code and a key.

A node identifier is 34 bytes: the region code narrowed to 16 bits
(big-endian) followed by the SHA-256 digest of the raw key bytes.
"""

from __future__ import annotations

import hashlib
import struct

REGION_ID_BYTES = 2
DIGEST_BYTES = hashlib.sha256().digest_size
NODE_ID_BYTES = REGION_ID_BYTES + DIGEST_BYTES


class InvalidKeyError(ValueError):
    """Raised when key material cannot produce a meaningful identifier."""


def to_identifier(region_code: int) -> int:
    """
    Narrow a region code to its low 16 bits.

    Codes above 0xFFFF are truncated, not rejected. The built-in taxonomy
    never exceeds 9999, so this only matters for foreign codes.
    """
    return region_code & 0xFFFF


def _key_bytes(key: bytes | bytearray | memoryview | str | None) -> bytes:
    if key is None:
        raise InvalidKeyError("Key must not be None")
    if isinstance(key, str):
        data = key.encode("utf-8")
    elif isinstance(key, (bytes, bytearray, memoryview)):
        data = bytes(key)
    else:
        raise InvalidKeyError(f"Key must be bytes or str, got {type(key).__name__}")
    if not data:
        raise InvalidKeyError("Key must not be empty")
    return data


def derive_node_id(region_code: int, key: bytes | bytearray | memoryview | str) -> bytes:
    """
    Build the 34-byte identifier for ``(region_code, key)``.

    Parameters
    ----------
    region_code:
        Region code; only the low 16 bits are kept.
    key:
        Key material, typically a public key. ``str`` keys are UTF-8 encoded.

    Returns
    -------
    bytes
        ``NODE_ID_BYTES`` bytes. Identical inputs always give identical output.

    Raises
    ------
    InvalidKeyError
        If the key is None, empty, or not bytes-like / str.
    """
    data = _key_bytes(key)
    prefix = struct.pack(">H", to_identifier(region_code))
    return prefix + hashlib.sha256(data).digest()


def split_node_id(node_id: bytes) -> tuple[int, bytes]:
    """Split an identifier back into ``(16-bit region identifier, digest)``."""
    if len(node_id) != NODE_ID_BYTES:
        raise ValueError(f"Node id must be {NODE_ID_BYTES} bytes, got {len(node_id)}")
    (region_identifier,) = struct.unpack(">H", node_id[:REGION_ID_BYTES])
    return region_identifier, bytes(node_id[REGION_ID_BYTES:])
