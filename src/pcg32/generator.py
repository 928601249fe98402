from __future__ import annotations

"""PCG32 (XSH-RR 64/32) generator matching the reference stream bit for bit."""

import struct
from typing import Protocol, TypeVar

from .trace import trace_event

__all__ = [
    "DEFAULT_INC",
    "DEFAULT_STATE",
    "IndexedSequence",
    "MULT",
    "Pcg32",
    "Pcg32Error",
    "advance_lcg_64",
    "f32",
]

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

MULT = 6364136223846793005
DEFAULT_STATE = 0x853C49E6748FEA9B
DEFAULT_INC = 0xDA3E39CB94B95BDB

_SCALE_2_NEG_32 = 2.0**-32

T = TypeVar("T")


class Pcg32Error(ValueError):
    pass


class IndexedSequence(Protocol[T]):
    def __len__(self) -> int: ...

    def __getitem__(self, index: int, /) -> T: ...

    def __setitem__(self, index: int, value: T, /) -> None: ...


def f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", float(value)))[0]


def advance_lcg_64(state: int, delta: int, cur_mult: int, cur_plus: int) -> int:
    """Apply `s -> cur_mult * s + cur_plus` to `state` `delta` times in O(log delta).

    Brown, "Random Number Generation with Arbitrary Stride" (1994). `delta` is
    taken modulo 2**64, so a negative value walks backwards the long way round.
    """
    delta = int(delta) & MASK64
    cur_mult = int(cur_mult) & MASK64
    cur_plus = int(cur_plus) & MASK64
    acc_mult = 1
    acc_plus = 0
    while delta > 0:
        if delta & 1:
            acc_mult = (acc_mult * cur_mult) & MASK64
            acc_plus = (acc_plus * cur_mult + cur_plus) & MASK64
        cur_plus = ((cur_mult + 1) * cur_plus) & MASK64
        cur_mult = (cur_mult * cur_mult) & MASK64
        delta >>= 1
    return (acc_mult * (int(state) & MASK64) + acc_plus) & MASK64


class Pcg32:
    """PCG32 pseudorandom number generator.

    State is two 64-bit words: `state` (position, any value) and `inc`
    (stream selector, always odd). Both are read-only; use `seed`, the draw
    methods, or `advance` to move the generator.

    Not thread-safe. For parallel work give each worker its own instance,
    either with a distinct `init_seq` or via `pcg32.streams.substream`.
    """

    __slots__ = ("_state", "_inc")

    def __init__(self, state: int = DEFAULT_STATE, inc: int = DEFAULT_INC) -> None:
        inc = int(inc) & MASK64
        if not inc & 1:
            raise Pcg32Error(f"stream increment must be odd, got 0x{inc:016x}")
        self._state = int(state) & MASK64
        self._inc = inc

    @classmethod
    def from_seed(cls, init_state: int, init_seq: int = 1) -> Pcg32:
        rng = cls()
        rng.seed(init_state, init_seq)
        return rng

    @property
    def state(self) -> int:
        return self._state

    @property
    def inc(self) -> int:
        return self._inc

    def __repr__(self) -> str:
        return f"Pcg32(state=0x{self._state:016x}, inc=0x{self._inc:016x})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pcg32):
            return NotImplemented
        return self._state == other._state and self._inc == other._inc

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> Pcg32:
        return Pcg32(self._state, self._inc)

    def seed(self, init_state: int, init_seq: int = 1) -> None:
        """Seed from a state initializer and a sequence selector (stream id).

        Mixes both values through two transitions so nearby seeds start far
        apart in the stream.
        """
        init_state = int(init_state) & MASK64
        init_seq = int(init_seq) & MASK64
        self._state = 0
        self._inc = ((init_seq << 1) | 1) & MASK64
        self._step()
        self._state = (self._state + init_state) & MASK64
        self._step()
        trace_event("seed", init_state=f"0x{init_state:016x}", init_seq=init_seq, state=f"0x{self._state:016x}")

    def _step(self) -> int:
        old = self._state
        self._state = (old * MULT + self._inc) & MASK64
        return old

    def _next_raw(self) -> int:
        old = self._step()
        xorshifted = (((old >> 18) ^ old) >> 27) & MASK32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK32

    def next_uint32(self, bound: int | None = None) -> int:
        """Uniform 32-bit draw, or uniform in `[0, bound)` when `bound` is given.

        The bounded form rejects draws below `2**32 % bound` to remove modulo
        bias. It terminates with probability 1; a bound of 2**31 + 1 (the worst
        case) rejects almost half of the draws.
        """
        if bound is None:
            return self._next_raw()
        bound = int(bound)
        if bound <= 0 or bound > MASK32:
            raise Pcg32Error(f"bound must be in [1, 2**32), got {bound}")
        threshold = ((-bound) & MASK32) % bound
        while True:
            r = self._next_raw()
            if r >= threshold:
                return r % bound

    def next_float(self) -> float:
        """Single precision value on [0, 1), returned as a Python float.

        The 32-bit draw is rounded to float32 first, so draws within 128 of
        2**32 round up to 1.0, same as the native implementation.
        """
        return f32(self._next_raw()) * _SCALE_2_NEG_32

    def next_double(self) -> float:
        # Only 32 bits of entropy; the low mantissa bits are always zero.
        return self._next_raw() * _SCALE_2_NEG_32

    def advance(self, delta: int) -> None:
        """Jump `delta` transitions ahead (negative: back) without drawing."""
        delta = int(delta)
        self._state = advance_lcg_64(self._state, delta, MULT, self._inc)
        trace_event("advance", delta=delta, state=f"0x{self._state:016x}")

    def shuffle(self, seq: IndexedSequence[T]) -> None:
        """Permute `seq` in place (Fisher-Yates, Knuth TAoCP 3.4.2)."""
        n = len(seq)
        if n > MASK32:
            raise Pcg32Error(f"sequence too long to shuffle: {n}")
        for i in range(n - 1, 0, -1):
            j = self.next_uint32(i + 1)
            seq[i], seq[j] = seq[j], seq[i]
        if n > 1:
            trace_event("shuffle", length=n)
