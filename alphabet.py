# alphabet.py
from __future__ import annotations

from collections.abc import Iterator

from debug import Debug
from errors import DuplicateError, NotFoundError, RangeError

debug = Debug()

ALPHA26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Alphabet:
    """An ordered set of encodable characters, numbered from 0."""

    def __init__(self, chars: str = ALPHA26) -> None:
        index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch in index:
                raise DuplicateError(f"Alphabet contains duplicate character {ch!r}")
            index[ch] = i

        self._chars: str = chars
        self._char_to_index: dict[str, int] = index
        debug.log("alphabet", f"built alphabet of {len(chars)} symbols")

    @property
    def chars(self) -> str:
        return self._chars

    def size(self) -> int:
        return len(self._chars)

    def contains(self, ch: str) -> bool:
        return ch in self._char_to_index

    # integer signal → letter
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self._chars)):
            hi = len(self._chars) - 1
            raise RangeError(f"Index {index} out of range 0–{hi}")
        return self._chars[index]

    # letter → integer signal
    def to_int(self, ch: str) -> int:
        try:
            return self._char_to_index[ch]
        except KeyError:
            raise NotFoundError(f"Character {ch!r} not in alphabet") from None

    # ── niceties --------------------------------------------------
    def __len__(self) -> int:
        return len(self._chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self._char_to_index

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"<Alphabet {self._chars!r}>"
