"""
HMAC-SHA256 Feistel Network
===========================
16-round balanced Feistel network over a 64-byte block.

The block is split into two 32-byte halves L and R. Each round derives
its own key from the master key, runs HMAC-SHA256 over one half and
folds the digest into the other half with XOR.

    round key   rk_i = HMAC-SHA256(key, bytes([i]))
    forward     (L, R) -> (R, L xor HMAC-SHA256(rk_i, R))     i = 0..15
    backward    (L, R) -> (R xor HMAC-SHA256(rk_i, L), L)     i = 15..0

The stream mode in chaining.py only ever calls forward(): the network
output is used as a keystream mask, never run over the data itself.
backward() is kept so the primitive stays a verifiable permutation.

Key:    256-bit (32 bytes)
Block:  512-bit (64 bytes)

Dependencies: cryptography >= 41.0
"""

from cryptography.hazmat.primitives import hashes, hmac

from .errors import InvalidBlockLength, InvalidKeyLength

KEY_SIZE   = 32
HALF_SIZE  = 32   # SHA-256 digest size
BLOCK_SIZE = HALF_SIZE * 2
ROUNDS     = 16


def as_bytes(value, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like, not {type(value).__name__}.")
    return bytes(value)


def check_key(key) -> bytes:
    key = as_bytes(key, "key")
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(f"Key must be {KEY_SIZE} bytes, got {len(key)}.")
    return key


def check_block(block) -> bytes:
    block = as_bytes(block, "block")
    if len(block) != BLOCK_SIZE:
        raise InvalidBlockLength(f"Block must be {BLOCK_SIZE} bytes, got {len(block)}.")
    return block


def _hmac_sha256(key: bytes, data: bytes) -> bytes:
    h = hmac.HMAC(key, hashes.SHA256())
    h.update(data)
    return h.finalize()


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two equal-length byte strings."""
    n = len(a)
    return (int.from_bytes(a, "big") ^ int.from_bytes(b, "big")).to_bytes(n, "big")


def derive_round_key(key: bytes, round_index: int) -> bytes:
    """Round key i = HMAC-SHA256(key, single byte i)."""
    key = check_key(key)
    if not 0 <= round_index < ROUNDS:
        raise ValueError(f"round_index must be in [0, {ROUNDS - 1}], got {round_index}.")
    return _round_key(key, round_index)


def _round_key(key: bytes, i: int) -> bytes:
    return _hmac_sha256(key, bytes([i]))


def forward(key: bytes, block: bytes) -> bytes:
    """Run the network in the forward direction. Returns a 64-byte block."""
    key   = check_key(key)
    block = check_block(block)
    left, right = block[:HALF_SIZE], block[HALF_SIZE:]
    for i in range(ROUNDS):
        rk = _round_key(key, i)
        left, right = right, xor_bytes(left, _hmac_sha256(rk, right))
    return left + right


def backward(key: bytes, block: bytes) -> bytes:
    """Exact inverse of forward(): backward(k, forward(k, b)) == b."""
    key   = check_key(key)
    block = check_block(block)
    left, right = block[:HALF_SIZE], block[HALF_SIZE:]
    for i in reversed(range(ROUNDS)):
        rk = _round_key(key, i)
        left, right = xor_bytes(right, _hmac_sha256(rk, left)), left
    return left + right
