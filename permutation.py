# permutation.py
from __future__ import annotations

from collections.abc import Sequence

from alphabet import Alphabet
from debug import Debug
from errors import (
    ConfigError,
    CycleSyntaxError,
    DuplicateError,
    NotFoundError,
    RangeError,
)

debug = Debug()

OPEN, CLOSE = "(", ")"


def _parse_cycles(cycles: str) -> list[str]:
    """Split "(ABC) (DE)" into ["ABC", "DE"]; whitespace anywhere is ignored."""
    parsed: list[str] = []
    current: list[str] | None = None

    for ch in cycles:
        if ch.isspace():
            continue
        if ch == OPEN:
            if current is not None:
                raise CycleSyntaxError(f"Nested {OPEN!r} in {cycles!r}")
            current = []
        elif ch == CLOSE:
            if current is None:
                raise CycleSyntaxError(f"Unmatched {CLOSE!r} in {cycles!r}")
            if not current:
                raise CycleSyntaxError(f"Empty cycle in {cycles!r}")
            parsed.append("".join(current))
            current = None
        elif current is None:
            raise CycleSyntaxError(f"Character {ch!r} outside a cycle in {cycles!r}")
        else:
            current.append(ch)

    if current is not None:
        raise CycleSyntaxError(f"Unterminated cycle in {cycles!r}")
    return parsed


class Permutation:
    """
    A permutation of 0..size-1, given in cycle notation over the characters
    of an alphabet: "(AELT) (BKD)" sends A→E, E→L, L→T, T→A, and so on.
    Characters that appear in no cycle map to themselves.

    Both directions are precomputed into index tables, so `permute` and
    `invert` are single lookups.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        parsed = _parse_cycles(cycles)

        reserved = [ch for ch in alphabet if ch in (OPEN, CLOSE) or ch.isspace()]
        if reserved:
            raise ConfigError(
                f"Alphabet cannot contain {OPEN!r}, {CLOSE!r} or whitespace: {reserved!r}"
            )

        size = alphabet.size()
        fwd = list(range(size))
        rev = list(range(size))
        seen: set[str] = set()

        for cycle in parsed:
            for ch in cycle:
                if ch in seen:
                    raise DuplicateError(f"Character {ch!r} appears in more than one cycle")
                if ch not in alphabet:
                    raise NotFoundError(f"Cycle character {ch!r} not in alphabet")
                seen.add(ch)
            idx = [alphabet.to_int(ch) for ch in cycle]
            for a, b in zip(idx, idx[1:] + idx[:1]):
                fwd[a] = b
                rev[b] = a

        self._alphabet = alphabet
        self._cycles: tuple[str, ...] = tuple(parsed)
        self._fwd: tuple[int, ...] = tuple(fwd)
        self._rev: tuple[int, ...] = tuple(rev)
        debug.log("permutation", f"{self.notation()} over {size} symbols")

    # ── alternative constructors ─────────────────────────────────
    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet) -> "Permutation":
        """Build from a substitution string: letter #k of the alphabet maps to wiring[k]."""
        if sorted(wiring) != sorted(alphabet.chars):
            raise ConfigError(f"Wiring {wiring!r} must be a permutation of the alphabet")

        visited: set[int] = set()
        cycles: list[str] = []
        for start in range(alphabet.size()):
            if start in visited:
                continue
            cycle: list[str] = []
            i = start
            while i not in visited:
                visited.add(i)
                cycle.append(alphabet.to_char(i))
                i = alphabet.to_int(wiring[i])
            if len(cycle) > 1:
                cycles.append(OPEN + "".join(cycle) + CLOSE)
        return cls(" ".join(cycles), alphabet)

    @classmethod
    def from_pairs(
        cls,
        pairs: str | Sequence[str | tuple[str, str]],
        alphabet: Alphabet,
    ) -> "Permutation":
        """Build a plugboard-style permutation of swaps from "AB CD" or ["AB", ("C", "D")]."""
        if isinstance(pairs, str):
            pairs = pairs.split()

        cycles: list[str] = []
        for raw in pairs:
            # normalise to (a, b)
            if len(raw) != 2:
                raise ConfigError(f"Pair {raw!r} must be exactly 2 symbols")
            a, b = raw
            if a == b:
                raise ConfigError(f"Pair cannot map a symbol to itself: {a!r}")
            cycles.append(f"{OPEN}{a}{b}{CLOSE}")
        return cls("".join(cycles), alphabet)

    # ── basic facts ──────────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def cycles(self) -> tuple[str, ...]:
        return self._cycles

    def size(self) -> int:
        return self._alphabet.size()

    def wrap(self, p: int) -> int:
        """Return P modulo the size of this permutation."""
        return p % self.size()

    # ── mapping ──────────────────────────────────────────────────
    def permute(self, p: int | str) -> int | str:
        """Successor of P in its cycle; characters in, characters out."""
        if isinstance(p, str):
            return self._alphabet.to_char(self._fwd[self._alphabet.to_int(p)])
        self._check(p)
        return self._fwd[p]

    def invert(self, c: int | str) -> int | str:
        """Predecessor of C in its cycle; the exact inverse of `permute`."""
        if isinstance(c, str):
            return self._alphabet.to_char(self._rev[self._alphabet.to_int(c)])
        self._check(c)
        return self._rev[c]

    def derangement(self) -> bool:
        """True iff no symbol maps to itself. A 1-symbol permutation never is one."""
        if self.size() == 1:
            return False
        return all(i != j for i, j in enumerate(self._fwd))

    # ── helpers ──────────────────────────────────────────────────
    def _check(self, p: int) -> None:
        if not (0 <= p < len(self._fwd)):
            hi = len(self._fwd) - 1
            raise RangeError(f"Index {p} out of range 0–{hi}")

    def notation(self) -> str:
        return "".join(f"{OPEN}{c}{CLOSE}" for c in self._cycles)

    def __repr__(self) -> str:
        return f"<Permutation {self.notation() or 'identity'}>"
