"""
feistel_stream
==============
Streaming symmetric encryption built on an HMAC-SHA256 Feistel network.

Layers:
    feistel   — 16-round Feistel network over 64-byte blocks (forward / backward)
    blocks    — regroups byte chunks into 64-byte blocks, sync and async
    padding   — PKCS#7-style padding plus an all-64 marker block
    chaining  — chained stream mode: encrypt / decrypt and async forms

Not a vetted cipher, and NOT authenticated. Pair it with a MAC if
tampering matters.

License: Apache 2.0
"""

__version__  = "1.0.0"

from .errors   import (FeistelStreamError, InvalidKeyLength, InvalidIVLength,
                       InvalidBlockLength, PaddingError)
from .feistel  import KEY_SIZE, BLOCK_SIZE, ROUNDS, derive_round_key, forward, backward
from .blocks   import DEFAULT_CHUNK_SIZE, blockize, ablockize, read_chunks
from .padding  import MARKER_BLOCK, pad, unpad
from .chaining import encrypt, decrypt, aencrypt, adecrypt, HmacStreamCipher

__all__ = [
    "FeistelStreamError",
    "InvalidKeyLength",
    "InvalidIVLength",
    "InvalidBlockLength",
    "PaddingError",
    "KEY_SIZE",
    "BLOCK_SIZE",
    "ROUNDS",
    "DEFAULT_CHUNK_SIZE",
    "derive_round_key",
    "forward",
    "backward",
    "blockize",
    "ablockize",
    "read_chunks",
    "MARKER_BLOCK",
    "pad",
    "unpad",
    "encrypt",
    "decrypt",
    "aencrypt",
    "adecrypt",
    "HmacStreamCipher",
]
