"""Per-cell candidate digits."""

from __future__ import annotations
from typing import List

DIGITS = range(1, 10)
ALL_DIGITS = 0b111111111

# Number of set bits for every 9-bit mask
_POPCOUNT = [bin(mask).count("1") for mask in range(ALL_DIGITS + 1)]


class CandidateSet:
    """
    The digits still possible for one cell.

    Digit ``d`` is possible when bit ``d - 1`` of the mask is set, so the
    remaining digits are always visited in ascending order. Once a set is
    fixed it is never changed by ``remove``.
    """

    __slots__ = ("mask", "fixed")

    def __init__(self, mask: int = ALL_DIGITS, fixed: bool = False):
        self.mask = mask
        self.fixed = fixed

    def size(self) -> int:
        """Number of digits still possible (0 to 9)."""
        return _POPCOUNT[self.mask]

    def value(self) -> int:
        """
        The single remaining digit.

        Only valid once the set has collapsed to one digit; anything else
        means propagation or search went wrong upstream.
        """
        assert self.mask, "candidate set has no values"
        assert _POPCOUNT[self.mask] == 1, "candidate set has multiple values"
        return self.mask.bit_length()

    def fix(self, digit: int) -> None:
        """Collapse the set to exactly ``digit``."""
        self.mask = 1 << (digit - 1)
        self.fixed = True

    def remove(self, digit: int) -> bool:
        """
        Drop ``digit`` from the set.

        Returns:
            True if the digit was present and removed. Fixed sets are left
            alone and always return False.
        """
        if self.fixed:
            return False
        bit = 1 << (digit - 1)
        if self.mask & bit:
            self.mask &= ~bit
            return True
        return False

    def clone(self) -> CandidateSet:
        return CandidateSet(self.mask, self.fixed)

    def digits(self) -> List[int]:
        """Possible digits in ascending order."""
        return [d for d in DIGITS if self.mask & (1 << (d - 1))]

    def __contains__(self, digit: int) -> bool:
        return 1 <= digit <= 9 and bool(self.mask & (1 << (digit - 1)))

    def __len__(self) -> int:
        return _POPCOUNT[self.mask]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateSet):
            return False
        return self.mask == other.mask and self.fixed == other.fixed

    def __repr__(self) -> str:
        return f"CandidateSet(digits={self.digits()}, fixed={self.fixed})"
