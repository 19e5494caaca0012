"""Deterministic xorshift PRNG used to pick the next word.

The seed is fixed so the review order is reproducible across runs.
This is not a source of real randomness.
"""

DEFAULT_SEED = 0x1337133713371337

_MASK64 = (1 << 64) - 1


class XorShiftRng:
    """64-bit xorshift (13, 17, 43) generator."""

    def __init__(self, seed: int = DEFAULT_SEED):
        seed &= _MASK64
        if seed == 0:
            raise ValueError("xorshift seed must be non-zero")
        self._state = seed

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> int:
        """Return the current state, then advance it."""
        ret = self._state
        x = self._state
        x ^= (x << 13) & _MASK64
        x ^= x >> 17
        x ^= (x << 43) & _MASK64
        self._state = x
        return ret

    def range(self, lo: int, hi: int) -> int:
        """Pseudo-random integer in [lo, hi], both inclusive."""
        if hi < lo:
            raise ValueError(f"Empty range: [{lo}, {hi}]")
        return self.next() % (hi - lo + 1) + lo
