"""
Error taxonomy for feistel_stream.

Every error is a ValueError, so callers that already guard length
checks with ``except ValueError`` keep working.
"""


class FeistelStreamError(ValueError):
    pass


class InvalidKeyLength(FeistelStreamError):
    """Key is not exactly KEY_SIZE bytes."""


class InvalidIVLength(FeistelStreamError):
    """IV is not exactly BLOCK_SIZE bytes."""


class InvalidBlockLength(FeistelStreamError):
    """
    A value reaching the Feistel transform is not BLOCK_SIZE bytes,
    or a ciphertext stream ended on a partial block.
    """


class PaddingError(FeistelStreamError):
    """Final block padding did not validate (strict mode only)."""
