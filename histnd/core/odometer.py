"""
Position Iterator (odometer)

Enumerates every index tuple inside per-dimension bounds. The fastest
dimension is incremented first; when it reaches its upper bound it is reset to
its lower bound and the carry moves to the next dimension. Once the carry runs
off the slowest dimension the sequence is exhausted and stays exhausted until
``reset``.

Two carry orders are used by the output formatter:
    dimension 0 fastest        raw image samples (the default)
    last dimension fastest     text rows (``last_fastest=True``)

Usage:
    odo = Odometer([2, 3])
    list(odo)   # (0,0), (1,0), (0,1), (1,1), (0,2), (1,2)
"""

from typing import Iterator, List, Optional, Sequence, Tuple


class Odometer:
    """
    Mutable multi-dimensional position with carry semantics.

    Args:
        upper: Exclusive upper bound per dimension
        lower: Inclusive lower bound per dimension (default all zeros)
        last_fastest: Advance the highest dimension first instead of dimension 0
    """

    def __init__(
        self,
        upper: Sequence[int],
        lower: Optional[Sequence[int]] = None,
        last_fastest: bool = False,
    ):
        self.upper: Tuple[int, ...] = tuple(upper)
        self.lower: Tuple[int, ...] = (
            tuple(lower) if lower is not None else (0,) * len(self.upper)
        )
        if len(self.lower) != len(self.upper):
            raise ValueError("lower and upper bounds differ in dimensionality")

        n = len(self.upper)
        self._carry_order = range(n - 1, -1, -1) if last_fastest else range(n)
        self.reset()

    def reset(self) -> None:
        """Rewind to the lower corner."""
        self.pos: List[int] = list(self.lower)
        # Number of dimensions that wrapped on the most recent advance()
        self.carries = 0
        self.exhausted = not self.upper or any(
            lo >= hi for lo, hi in zip(self.lower, self.upper)
        )

    @property
    def position(self) -> Tuple[int, ...]:
        return tuple(self.pos)

    def advance(self) -> bool:
        """Step to the next position. Returns True once the sequence is exhausted."""
        if self.exhausted:
            return True

        carries = 0
        for d in self._carry_order:
            self.pos[d] += 1
            if self.pos[d] < self.upper[d]:
                break
            self.pos[d] = self.lower[d]
            carries += 1
        else:
            self.exhausted = True

        self.carries = carries
        return self.exhausted

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        while not self.exhausted:
            yield tuple(self.pos)
            self.advance()
