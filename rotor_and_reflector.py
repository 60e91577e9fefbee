# rotor_and_reflector.py
from __future__ import annotations

from copy import copy

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, RangeError
from permutation import Permutation

debug = Debug()


class Rotor:
    """
    A wheel named NAME wired as PERM in its 0 position.

    `setting` is the current rotational position and `ring` the ring-stellung
    offset; both are indices into the alphabet. The plain Rotor never moves and
    never reflects; subclasses override the capability predicates.
    """

    kind = "rotor"

    def __init__(self, name: str, perm: Permutation) -> None:
        self._name = name
        self._permutation = perm
        self._setting = 0
        self._ring = 0

    # ── identity ──────────────────────────────────────────────────
    @property
    def name(self) -> str:
        return self._name

    @property
    def permutation(self) -> Permutation:
        return self._permutation

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    def size(self) -> int:
        return self._permutation.size()

    # ── capabilities ──────────────────────────────────────────────
    def rotates(self) -> bool:
        return False

    def reflecting(self) -> bool:
        return False

    def at_notch(self) -> bool:
        return False

    def advance(self) -> None:
        """Advance one position, if possible. By default, does nothing."""

    # ── setting & ring ────────────────────────────────────────────
    @property
    def setting(self) -> int:
        return self._setting

    @property
    def ring(self) -> int:
        return self._ring

    def set(self, posn: int | str) -> None:
        self._setting = self._position(posn)

    def set_ring(self, posn: int | str) -> None:
        self._ring = self._position(posn)

    def _position(self, posn: int | str) -> int:
        if isinstance(posn, str):
            return self.alphabet.to_int(posn)
        if not (0 <= posn < self.size()):
            raise RangeError(f"Position {posn} out of range 0–{self.size() - 1}")
        return posn

    def fresh(self) -> "Rotor":
        """An independent copy at setting 0, ring 0; the wiring is shared."""
        clone = copy(self)
        clone._setting = 0
        clone._ring = 0
        return clone

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        """Convert P (0..size-1) through my wiring, right to left."""
        perm = self._permutation
        self._check(p)
        shift = self._setting - self._ring
        mapped = perm.permute(perm.wrap(p + shift))
        return perm.wrap(mapped - shift)

    def convert_backward(self, e: int) -> int:
        """Convert E (0..size-1) through the inverse of my wiring, left to right."""
        perm = self._permutation
        self._check(e)
        shift = self._setting - self._ring
        mapped = perm.invert(perm.wrap(e + shift))
        return perm.wrap(mapped - shift)

    def _check(self, p: int) -> None:
        if not (0 <= p < self.size()):
            raise RangeError(f"Signal {p} out of range 0–{self.size() - 1}")

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self._name} "
            f"pos={self._setting} ring={self._ring}>"
        )


class FixedRotor(Rotor):
    """A wheel that sits in a slot without a pawl (e.g. the M4 Greek wheels)."""

    kind = "fixed"


class MovingRotor(Rotor):
    """A rotating wheel whose notches sit at the characters in NOTCHES."""

    kind = "moving"

    def __init__(self, name: str, perm: Permutation, notches: str = "") -> None:
        super().__init__(name, perm)
        bad = [ch for ch in notches if ch not in perm.alphabet]
        if bad:
            raise ConfigError(f"Notch characters {bad!r} of rotor {name} not in alphabet")
        self._notches = notches
        self._notch_index = frozenset(perm.alphabet.to_int(ch) for ch in notches)

    @property
    def notches(self) -> str:
        return self._notches

    def rotates(self) -> bool:
        return True

    def at_notch(self) -> bool:
        return self._setting in self._notch_index

    def advance(self) -> None:
        self._setting = self._permutation.wrap(self._setting + 1)
        debug.log("rotor", f"{self._name} → {self.alphabet.to_char(self._setting)}")


class Reflector(Rotor):
    """The leftmost wheel; it turns the signal round and never steps."""

    kind = "reflector"

    def reflecting(self) -> bool:
        return True


ROTOR_KINDS: dict[str, type[Rotor]] = {
    FixedRotor.kind: FixedRotor,
    MovingRotor.kind: MovingRotor,
    Reflector.kind: Reflector,
}


def make_rotor(kind: str, name: str, perm: Permutation, notches: str = "") -> Rotor:
    """Build a wheel of the named KIND ("moving", "fixed" or "reflector")."""
    try:
        cls = ROTOR_KINDS[kind]
    except KeyError:
        raise ConfigError(
            f"Unknown rotor kind {kind!r} for {name}; expected one of {sorted(ROTOR_KINDS)}"
        ) from None
    if cls is MovingRotor:
        return MovingRotor(name, perm, notches)
    if notches:
        raise ConfigError(f"Only moving rotors carry notches, {name} is {kind}")
    return cls(name, perm)
