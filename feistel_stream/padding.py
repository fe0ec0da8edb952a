"""
PKCS#7-style padding with a dedicated marker block.

A short final block of k bytes (0 <= k < 64) is filled with 64 - k
bytes of value 64 - k. A stream that ends on a block boundary instead
gets one extra block of 64 bytes all equal to 64, so the decrypting
side can always tell padding from data.
"""

import logging

from .errors import PaddingError
from .feistel import BLOCK_SIZE

logger = logging.getLogger(__name__)

MARKER_BLOCK = bytes([BLOCK_SIZE]) * BLOCK_SIZE


def pad(block: bytes) -> bytes:
    """Pad a block of 0..63 bytes out to BLOCK_SIZE."""
    if len(block) >= BLOCK_SIZE:
        raise ValueError(f"Only blocks shorter than {BLOCK_SIZE} bytes are padded, got {len(block)}.")
    n = BLOCK_SIZE - len(block)
    return bytes(block) + bytes([n]) * n


def unpad(block: bytes, strict: bool = False) -> bytes:
    """
    Strip padding from the final decrypted block.

    Returns b"" for the marker block, the data bytes for a padded block,
    and the block unchanged when the padding does not validate. That
    last case is a wrong key or corrupt ciphertext; there is no integrity
    check, so it is only an error when `strict` is set.
    """
    if block == MARKER_BLOCK:
        return b""
    n = block[-1]
    if 1 <= n < BLOCK_SIZE and block[-n:] == bytes([n]) * n:
        return block[:-n]
    if strict:
        raise PaddingError(f"Final block padding is invalid (last byte {n}).")
    logger.debug("Final block padding did not validate; emitting it unmodified")
    return block
