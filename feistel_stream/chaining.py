"""
Chained Stream Mode
===================
Encrypts byte streams of any length with the HMAC Feistel network.

Each 64-byte block is XORed with a mask taken from the network's
forward direction over the running chain state:

    mask_i   = forward(key, chain_i)        chain_0 = IV
    cipher_i = plain_i xor mask_i           chain_{i+1} = cipher_i

Decryption rebuilds the same masks from the ciphertext it has already
seen, so backward() is never needed. The last plaintext block is
padded (see padding.py); when the input ends on a block boundary, or
is empty, a marker block is appended. Ciphertext is therefore always
floor(len / 64) + 1 blocks.

Wire format: bare concatenation of 64-byte ciphertext blocks. No
header, no IV, no tag. The IV travels out of band.

There is NO integrity protection. A wrong key or tampered ciphertext
decrypts to garbage of possibly the wrong length, not to an error,
unless strict_padding is requested.

Key:  256-bit (32 bytes)
IV:   512-bit (64 bytes), one per stream
"""

import logging
import os
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, Optional

from .blocks import ablockize, blockize
from .errors import InvalidBlockLength, InvalidIVLength
from .feistel import BLOCK_SIZE, KEY_SIZE, as_bytes, check_key, forward, xor_bytes
from .padding import MARKER_BLOCK, pad, unpad

logger = logging.getLogger(__name__)


def _check_iv(iv) -> bytes:
    iv = as_bytes(iv, "iv")
    if len(iv) != BLOCK_SIZE:
        raise InvalidIVLength(f"IV must be {BLOCK_SIZE} bytes, got {len(iv)}.")
    return iv


def _chunks(data):
    # A bare bytes object iterates as ints; treat it as one chunk.
    if isinstance(data, (bytes, bytearray, memoryview)):
        return [data]
    return data


async def _achunks(data):
    if isinstance(data, (bytes, bytearray, memoryview)):
        yield data
        return
    async for chunk in data:
        yield chunk


class _EncryptChain:
    """Chain state for one encryption call."""

    def __init__(self, key: bytes, iv: bytes):
        self._key = check_key(key)
        self._chain = _check_iv(iv)
        # Empty input counts as ending on a full block: it still gets a marker.
        self._last_full = True
        self.blocks = 0

    def _mask(self, block: bytes) -> bytes:
        cipher = xor_bytes(block, forward(self._key, self._chain))
        self._chain = cipher
        self.blocks += 1
        return cipher

    def feed(self, block: bytes) -> bytes:
        if len(block) < BLOCK_SIZE:
            block = pad(block)
            self._last_full = False
        else:
            self._last_full = True
        return self._mask(block)

    def finish(self) -> Optional[bytes]:
        if not self._last_full:
            return None
        logger.debug("Appending padding marker block")
        return self._mask(MARKER_BLOCK)


class _DecryptChain:
    """Chain state for one decryption call, with one block of lookahead."""

    def __init__(self, key: bytes, iv: bytes, strict_padding: bool = False):
        self._key = check_key(key)
        self._chain = _check_iv(iv)
        self._strict = strict_padding
        self._held = None
        self.blocks = 0

    def feed(self, block: bytes) -> Optional[bytes]:
        """Take one ciphertext block, release the previously held plaintext."""
        if len(block) != BLOCK_SIZE:
            raise InvalidBlockLength(
                f"Ciphertext must be a multiple of {BLOCK_SIZE} bytes; "
                f"trailing block has {len(block)}."
            )
        released = self._held
        self._held = xor_bytes(block, forward(self._key, self._chain))
        self._chain = block
        self.blocks += 1
        return released

    def finish(self) -> bytes:
        if self._held is None:
            return b""
        tail = unpad(self._held, self._strict)
        if not tail:
            logger.debug("Stripped padding marker block")
        return tail


def encrypt(key: bytes, iv: bytes, plaintext: Iterable[bytes]) -> Iterator[bytes]:
    """
    Lazily encrypt an iterable of byte chunks (or a single bytes object).
    Key and IV are checked here, before any block is produced.
    Yields 64-byte ciphertext blocks.
    """
    chain = _EncryptChain(key, iv)
    return _encrypt(chain, _chunks(plaintext))


def _encrypt(chain: _EncryptChain, chunks: Iterable[bytes]) -> Iterator[bytes]:
    for block in blockize(chunks, BLOCK_SIZE):
        yield chain.feed(block)
    tail = chain.finish()
    if tail is not None:
        yield tail
    logger.debug(f"Encrypted stream: {chain.blocks} blocks")


def decrypt(key: bytes, iv: bytes, ciphertext: Iterable[bytes],
            strict_padding: bool = False) -> Iterator[bytes]:
    """
    Lazily decrypt ciphertext chunks of any size. Yields plaintext
    pieces; only the last may be shorter than 64 bytes.
    Raises InvalidBlockLength if the ciphertext ends on a partial block,
    and PaddingError on bad final padding when strict_padding is set.
    """
    chain = _DecryptChain(key, iv, strict_padding)
    return _decrypt(chain, _chunks(ciphertext))


def _decrypt(chain: _DecryptChain, chunks: Iterable[bytes]) -> Iterator[bytes]:
    for block in blockize(chunks, BLOCK_SIZE):
        plain = chain.feed(block)
        if plain is not None:
            yield plain
    tail = chain.finish()
    if tail:
        yield tail
    logger.debug(f"Decrypted stream: {chain.blocks} blocks")


def aencrypt(key: bytes, iv: bytes, plaintext: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    """Async form of encrypt(). Key and IV are still checked eagerly."""
    chain = _EncryptChain(key, iv)
    return _aencrypt(chain, _achunks(plaintext))


async def _aencrypt(chain: _EncryptChain, chunks: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    async for block in ablockize(chunks, BLOCK_SIZE):
        yield chain.feed(block)
    tail = chain.finish()
    if tail is not None:
        yield tail
    logger.debug(f"Encrypted stream: {chain.blocks} blocks")


def adecrypt(key: bytes, iv: bytes, ciphertext: AsyncIterable[bytes],
             strict_padding: bool = False) -> AsyncIterator[bytes]:
    """Async form of decrypt()."""
    chain = _DecryptChain(key, iv, strict_padding)
    return _adecrypt(chain, _achunks(ciphertext))


async def _adecrypt(chain: _DecryptChain, chunks: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    async for block in ablockize(chunks, BLOCK_SIZE):
        plain = chain.feed(block)
        if plain is not None:
            yield plain
    tail = chain.finish()
    if tail:
        yield tail
    logger.debug(f"Decrypted stream: {chain.blocks} blocks")


class HmacStreamCipher:
    """HMAC Feistel stream encryption bound to one key."""

    KEY_SIZE = KEY_SIZE
    IV_SIZE  = BLOCK_SIZE

    def __init__(self, key: bytes = None, strict_padding: bool = False):
        """
        Pass a 32-byte key, or omit to auto-generate one.
        strict_padding turns bad final padding into PaddingError.
        """
        if key is None:
            key = self.generate_key()
        self._key = check_key(key)
        self.strict_padding = strict_padding

    @property
    def key(self) -> bytes:
        return self._key

    @staticmethod
    def generate_key() -> bytes:
        return os.urandom(KEY_SIZE)

    @staticmethod
    def generate_iv() -> bytes:
        return os.urandom(BLOCK_SIZE)

    def encrypt_stream(self, iv: bytes, chunks: Iterable[bytes]) -> Iterator[bytes]:
        return encrypt(self._key, iv, chunks)

    def decrypt_stream(self, iv: bytes, chunks: Iterable[bytes]) -> Iterator[bytes]:
        return decrypt(self._key, iv, chunks, strict_padding=self.strict_padding)

    def encrypt(self, iv: bytes, plaintext: bytes) -> bytes:
        """Encrypt a whole message. The IV is NOT included in the output."""
        return b"".join(self.encrypt_stream(iv, plaintext))

    def decrypt(self, iv: bytes, ciphertext: bytes) -> bytes:
        return b"".join(self.decrypt_stream(iv, ciphertext))

    def __repr__(self):
        return f"HmacStreamCipher(strict_padding={self.strict_padding})"
