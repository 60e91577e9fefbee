# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, RangeError, RotorLookupError
from permutation import Permutation
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """
    A complete rotor machine with alphabet ALPHA, 1 < NUM_ROTORS slots and
    0 <= NUM_PAWLS < NUM_ROTORS pawls. ALL_ROTORS is the catalog of wheels
    that `insert_rotors` chooses from; the machine works on its own copies,
    so the catalog entries are never mutated.
    """

    def __init__(
        self,
        alpha: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors <= 1:
            raise ConfigError(f"Need more than one rotor slot, got {num_rotors}")
        if not (0 <= num_pawls < num_rotors):
            raise ConfigError(f"Pawls must be in 0–{num_rotors - 1}, got {num_pawls}")

        self._alphabet = alpha
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls

        self._catalog: dict[str, list[Rotor]] = {}
        for rotor in all_rotors:
            self._catalog.setdefault(rotor.name, []).append(rotor)

        self._rotors: tuple[Rotor, ...] = ()
        self._plugboard: Permutation | None = None

    # ── introspection ───────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._num_pawls

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        return self._rotors

    @property
    def plugboard(self) -> Permutation | None:
        return self._plugboard

    def available(self) -> list[str]:
        return list(self._catalog)

    def positions(self) -> str:
        """Window letters of the non-reflector slots, left to right."""
        return "".join(self._alphabet.to_char(r.setting) for r in self._rotors[1:])

    # ── configuration ───────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str] | str) -> None:
        """
        Fill my slots with fresh copies of the catalog rotors NAMES
        (NAMES[0] names the reflector), every one at setting 0. The whole
        selection is checked before any slot changes.
        """
        if isinstance(names, str):
            names = names.split()
        if len(names) != self._num_rotors:
            raise RotorLookupError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )
        dupes = sorted({n for n in names if list(names).count(n) > 1})
        if dupes:
            raise RotorLookupError(f"Rotor(s) named more than once: {', '.join(dupes)}")

        chosen = [self._lookup(name) for name in names]

        for rotor in chosen:
            if rotor.alphabet != self._alphabet:
                raise ConfigError(f"Rotor {rotor.name} is wired for a different alphabet")
        if not chosen[0].reflecting():
            raise ConfigError(f"Leftmost rotor must be a reflector, got {chosen[0].name}")
        for rotor in chosen[1:]:
            if rotor.reflecting():
                raise ConfigError(f"Reflector {rotor.name} may only sit in the leftmost slot")
        for rotor in chosen[self._num_rotors - self._num_pawls:]:
            if not rotor.rotates():
                raise ConfigError(f"Rotor {rotor.name} sits under a pawl but cannot rotate")

        self._rotors = tuple(rotor.fresh() for rotor in chosen)
        debug.log("machine", f"inserted {' '.join(names)}")

    def set_rotors(self, setting: str) -> None:
        """Rotate the non-reflector slots to the window letters in SETTING."""
        for rotor, posn in zip(self._rotors[1:], self._parse_setting(setting)):
            rotor.set(posn)
        debug.log("machine", f"setting {setting}")

    reset = set_rotors

    def set_ring_rotors(self, ring_setting: str) -> None:
        """Apply ring-stellung offsets, one letter per non-reflector slot."""
        for rotor, posn in zip(self._rotors[1:], self._parse_setting(ring_setting)):
            rotor.set_ring(posn)
        debug.log("machine", f"ring setting {ring_setting}")

    def set_plugboard(self, plugboard: Permutation | None) -> None:
        """Install PLUGBOARD (pairs only), or remove it with None."""
        if plugboard is not None:
            self.check_plugboard(plugboard)
        self._plugboard = plugboard
        debug.log("plugboard", f"{plugboard!r}")

    def check_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self._alphabet:
            raise ConfigError("Plugboard is defined over a different alphabet")
        # a board that swaps every symbol is refused as well
        if plugboard.derangement():
            raise ConfigError("Plugboard may not be a derangement of the whole alphabet")
        for cycle in plugboard.cycles:
            if len(cycle) != 2:
                raise ConfigError(f"Plugboard cycle ({cycle}) must swap exactly 2 symbols")

    def check_setting(self, setting: str) -> list[int]:
        """Validate a one-letter-per-slot SETTING and return its indices."""
        if len(setting) != self._num_rotors - 1:
            raise ConfigError(
                f"Setting {setting!r} must have {self._num_rotors - 1} characters"
            )
        return [self._alphabet.to_int(ch) for ch in setting]

    # ── stepping logic  ─────────────────────────────────────────
    def _step_rotors(self) -> None:
        """
        Advance rotors one key-press. Which slots move is decided from a
        single snapshot of the notches taken before anything turns; that
        is what makes the middle rotor double-step.
        """
        if self._num_pawls == 0:
            return

        rotors = self._rotors
        notched = [r.at_notch() for r in rotors]
        last = self._num_rotors - 1
        moving: set[int] = {last}

        for i in range(self._num_rotors - self._num_pawls, last):
            if notched[i + 1]:
                moving.add(i)
            if notched[i] and not rotors[i - 1].reflecting():
                moving.update((i, i - 1))

        for i in moving:
            rotors[i].advance()
        debug.log("stepping", f"slots {sorted(moving)} → {self.positions()}")

    # ── encipher one symbol  ────────────────────────────────────
    def convert(self, c: int | str) -> int | str:
        """
        Advance the machine, then run index C through plugboard, rotors
        right to left (reflector included), back left to right, and the
        plugboard again. A string argument is treated as a whole message.
        """
        if isinstance(c, str):
            return self.convert_message(c)
        if not self._rotors:
            raise ConfigError("No rotors inserted")
        if not (0 <= c < self._alphabet.size()):
            raise RangeError(f"Index {c} out of range 0–{self._alphabet.size() - 1}")

        self._step_rotors()
        signal = c

        if self._plugboard is not None:
            signal = self._plugboard.permute(signal)

        for rotor in reversed(self._rotors):
            signal = rotor.convert_forward(signal)

        for rotor in self._rotors[1:]:
            signal = rotor.convert_backward(signal)

        if self._plugboard is not None:
            signal = self._plugboard.permute(signal)

        debug.log("machine", f"{c} → {signal}")
        return signal

    def convert_message(self, msg: str) -> str:
        """Encode or decode MSG, leaving the rotors where the last symbol put them."""
        alpha = self._alphabet
        return "".join(alpha.to_char(self.convert(alpha.to_int(ch))) for ch in msg)

    # ── helpers ─────────────────────────────────────────────────
    def _lookup(self, name: str) -> Rotor:
        matches = self._catalog.get(name, [])
        if not matches:
            raise RotorLookupError(f"No rotor named {name!r} among the available rotors")
        if len(matches) > 1:
            raise RotorLookupError(f"Rotor name {name!r} is ambiguous in the catalog")
        return matches[0]

    def _parse_setting(self, setting: str) -> list[int]:
        if not self._rotors:
            raise ConfigError("No rotors inserted")
        return self.check_setting(setting)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._rotors) or "empty"
        return f"<Machine [{names}] pos={self.positions() or '-'}>"
