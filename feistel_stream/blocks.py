"""
Stream blockizer: regroup arbitrary byte chunks into fixed-size blocks.

Both forms are pull-based. Input is only consumed when the buffer is
short of a full block, and a block is only cut when the consumer asks
for the next one. Blocks are sliced straight out of each incoming
chunk; only a leftover of fewer than `size` bytes is ever buffered.
"""

from typing import AsyncIterable, AsyncIterator, BinaryIO, Iterable, Iterator

DEFAULT_CHUNK_SIZE = 64 * 1024


def _check_size(size: int) -> None:
    if size <= 0:
        raise ValueError(f"Block size must be positive, got {size}.")


def _cut(buf: bytearray, chunk, size: int) -> Iterator[bytes]:
    """Yield the full blocks formed by `buf` + `chunk`; leave the rest in `buf`."""
    view = memoryview(chunk).cast("B")
    if buf:
        take = size - len(buf)
        buf += view[:take]
        view = view[take:]
        if len(buf) < size:
            return
        yield bytes(buf)
        buf.clear()
    while len(view) >= size:
        yield bytes(view[:size])
        view = view[size:]
    buf += view


def blockize(chunks: Iterable[bytes], size: int) -> Iterator[bytes]:
    """
    Yield `size`-byte blocks cut from `chunks`, then the remainder
    (1..size-1 bytes) if any is left once the input runs out.
    """
    _check_size(size)
    buf = bytearray()
    for chunk in chunks:
        yield from _cut(buf, chunk, size)
    if buf:
        yield bytes(buf)


async def ablockize(chunks: AsyncIterable[bytes], size: int) -> AsyncIterator[bytes]:
    """Async form of blockize() for async byte sources."""
    _check_size(size)
    buf = bytearray()
    async for chunk in chunks:
        for block in _cut(buf, chunk, size):
            yield block
    if buf:
        yield bytes(buf)


def read_chunks(fileobj: BinaryIO, size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Lazily read a binary file object in `size`-byte chunks until EOF."""
    _check_size(size)
    while True:
        chunk = fileobj.read(size)
        if not chunk:
            return
        yield chunk
