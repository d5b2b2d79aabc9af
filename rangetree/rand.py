import os
from typing import Optional

MASK = (1 << 64) - 1


class XorShift:
    """xorshift64 generator with caller-owned state."""

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            while True:
                seed = int.from_bytes(os.urandom(8), "little")
                if seed != 0:
                    break
        seed &= MASK
        if seed == 0:
            raise ValueError("Seed must not be zero")
        self.state = seed

    def next(self) -> int:
        x = self.state
        x ^= (x << 13) & MASK
        x ^= x >> 17
        x ^= (x << 5) & MASK
        self.state = x
        return x

    def randint(self, a: int, b: int) -> int:
        """Returns an integer in [a, b]."""
        if a > b:
            raise ValueError(f"Empty range: [{a}, {b}]")
        return a + self.next() % (b - a + 1)
