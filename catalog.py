# catalog.py
from __future__ import annotations

from typing import Dict, List

from alphabet import ALPHA26, Alphabet
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, make_rotor

# ────────────────────────────────────────────────────────────────────────
#  0. Wheel database  (name → kind, wiring over A‥Z, notches)
# ────────────────────────────────────────────────────────────────────────

WHEELS: Dict[str, tuple[str, str, str]] = {
    # moving rotors ------------------------------------------------------
    "I":      ("moving", "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":     ("moving", "AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":    ("moving", "BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":     ("moving", "ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":      ("moving", "VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":     ("moving", "JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":    ("moving", "NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "VIII":   ("moving", "FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
    # Greek wheels (no pawl) ---------------------------------------------
    "BETA":   ("fixed", "LEYJVCNIXWPBQMDRTAKZGFUHOS", ""),
    "GAMMA":  ("fixed", "FSOKANUERHMBTIYCWLQPZXVGJD", ""),
    # reflectors ---------------------------------------------------------
    "A":      ("reflector", "EJMZALYXVBWFCRQUONTSPIKHGD", ""),
    "B":      ("reflector", "YRUHQSLDPXNGOKMIEBFZCWVJAT", ""),
    "C":      ("reflector", "FVPJIAOYEDRZXWGCTKUQSBNMHL", ""),
    "B_THIN": ("reflector", "ENKQAUYWJICOPBLMDXZVFTHRGS", ""),
    "C_THIN": ("reflector", "RDOBJNTKVEHMLFCWZAXGYIPSUQ", ""),
}

# ────────────────────────────────────────────────────────────────────────
#  1. Machine models
# ────────────────────────────────────────────────────────────────────────

_WALZEN = ["I", "II", "III", "IV", "V"]
_NAVY = _WALZEN + ["VI", "VII", "VIII"]

SUITES: Dict[str, Dict] = {
    "I": {
        "name": "Enigma I",
        "slots": 4,
        "pawls": 3,
        "wheels": ["A", "B", "C"] + _WALZEN,
    },
    "M3": {
        "name": "Enigma M3",
        "slots": 4,
        "pawls": 3,
        "wheels": ["B", "C"] + _NAVY,
    },
    "M4": {
        "name": "Enigma M4",
        "slots": 5,
        "pawls": 3,
        "wheels": ["B_THIN", "C_THIN", "BETA", "GAMMA"] + _NAVY,
    },
}


def rotor_catalog(names: List[str] | None = None, alphabet: Alphabet | None = None) -> List[Rotor]:
    """Return fresh rotor objects for NAMES (every known wheel by default)."""
    alpha = alphabet or Alphabet(ALPHA26)
    wanted = list(WHEELS) if names is None else names
    rotors: List[Rotor] = []
    for name in wanted:
        try:
            kind, wiring, notches = WHEELS[name]
        except KeyError:
            raise ConfigError(f"Unknown wheel {name!r}") from None
        rotors.append(make_rotor(kind, name, Permutation.from_wiring(wiring, alpha), notches))
    return rotors


def build_suite(suite: str) -> Machine:
    """An empty machine of model SUITE, stocked with that model's wheels."""
    try:
        model = SUITES[suite.upper()]
    except KeyError:
        raise ConfigError(f"Unknown suite {suite!r}. Expected one of {list(SUITES)}") from None
    alpha = Alphabet(ALPHA26)
    return Machine(alpha, model["slots"], model["pawls"], rotor_catalog(model["wheels"], alpha))


__all__ = ["WHEELS", "SUITES", "rotor_catalog", "build_suite"]
