"""MD5 hash values and an incremental MD5 computation context."""

from __future__ import annotations

import math
import struct

__all__ = ["MD5Hash", "MD5Context"]

_MASK32 = 0xFFFFFFFF
_BLOCK_SIZE = 64
_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

_SHIFTS = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)
_CONSTANTS = tuple(int(abs(math.sin(i + 1)) * 2**32) & _MASK32 for i in range(64))
_ZERO_CHUNK = bytes(64 * 1024)


def _rotl(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & _MASK32


def _compress(state: list[int], block) -> None:
    """Fold one 64-byte block into the four-word state in place."""
    words = struct.unpack_from("<16I", block)
    a, b, c, d = state
    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
            g = i
        elif i < 32:
            f = (d & b) | (~d & c)
            g = (5 * i + 1) % 16
        elif i < 48:
            f = b ^ c ^ d
            g = (3 * i + 5) % 16
        else:
            f = c ^ (b | ~d)
            g = (7 * i) % 16
        f = (f + a + _CONSTANTS[i] + words[g]) & _MASK32
        a, d, c = d, c, b
        b = (b + _rotl(f, _SHIFTS[i])) & _MASK32
    state[0] = (state[0] + a) & _MASK32
    state[1] = (state[1] + b) & _MASK32
    state[2] = (state[2] + c) & _MASK32
    state[3] = (state[3] + d) & _MASK32


class MD5Hash:
    """A 16-byte MD5 hash value.

    Ordering treats byte 15 as the most significant byte.
    """

    __slots__ = ("_digest",)

    def __init__(self, digest=bytes(16)):
        digest = bytes(digest)
        if len(digest) != 16:
            raise ValueError(f"an MD5 hash is 16 bytes, got {len(digest)}")
        self._digest = digest

    @property
    def digest(self) -> bytes:
        return self._digest

    def _key(self) -> bytes:
        return self._digest[::-1]

    def __eq__(self, other):
        if not isinstance(other, MD5Hash):
            return NotImplemented
        return self._digest == other._digest

    def __lt__(self, other):
        if not isinstance(other, MD5Hash):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other):
        if not isinstance(other, MD5Hash):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other):
        if not isinstance(other, MD5Hash):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other):
        if not isinstance(other, MD5Hash):
            return NotImplemented
        return self._key() >= other._key()

    def __hash__(self):
        return hash(self._digest)

    def __bytes__(self):
        return self._digest

    def __str__(self):
        return self._key().hex().upper()

    def __repr__(self):
        return f"MD5Hash({self._digest.hex()!r})"


class MD5Context:
    """Incremental MD5 computation with a 64-byte buffer."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Return to the initial state with no data processed."""
        self._state = list(_INITIAL_STATE)
        self._pending = bytearray()
        self._count = 0

    @property
    def byte_count(self) -> int:
        """Total number of bytes processed so far."""
        return self._count

    def update(self, data) -> None:
        """Process the bytes in ``data``."""
        view = memoryview(data).cast("B")
        self._count += len(view)
        pos = 0
        if self._pending:
            take = min(_BLOCK_SIZE - len(self._pending), len(view))
            self._pending += view[:take]
            pos = take
            if len(self._pending) < _BLOCK_SIZE:
                return
            _compress(self._state, self._pending)
            self._pending.clear()
        end = pos + ((len(view) - pos) // _BLOCK_SIZE) * _BLOCK_SIZE
        for offset in range(pos, end, _BLOCK_SIZE):
            _compress(self._state, view[offset:offset + _BLOCK_SIZE])
        self._pending += view[end:]

    def update_zeros(self, length: int) -> None:
        """Process ``length`` zero bytes."""
        if length < 0:
            raise ValueError("length must not be negative")
        while length > 0:
            chunk = min(length, len(_ZERO_CHUNK))
            self.update(_ZERO_CHUNK[:chunk])
            length -= chunk

    def final(self) -> MD5Hash:
        """Pad the data, finish the computation and return the hash."""
        bits = (self._count << 3) & 0xFFFFFFFFFFFFFFFF
        used = len(self._pending)
        if used >= _BLOCK_SIZE - 8:
            padding = 2 * _BLOCK_SIZE - 8 - used
        else:
            padding = _BLOCK_SIZE - 8 - used
        self.update(b"\x80" + bytes(padding - 1))
        self.update(struct.pack("<Q", bits))
        return self.hash()

    def hash(self) -> MD5Hash:
        """Return the current state as a hash value, without padding."""
        return MD5Hash(struct.pack("<4I", *self._state))

    def copy(self) -> "MD5Context":
        """Return an independent context in the same state."""
        other = MD5Context.__new__(MD5Context)
        other._state = list(self._state)
        other._pending = bytearray(self._pending)
        other._count = self._count
        return other

    def __str__(self):
        a, b, c, d = self._state
        high = (self._count >> 32) & _MASK32
        low = self._count & _MASK32
        return f"{d:08X}{c:08X}{b:08X}{a:08X}:{high:08X}{low:08X}"