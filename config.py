# config.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from alphabet import Alphabet
from catalog import build_suite
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, make_rotor

debug = Debug()

REQUIRED_KEYS = {"alphabet", "slots", "pawls", "rotors"}


@dataclass(slots=True)
class Config:
    """Runtime switches for the message harness around the machine."""

    block: int = 5          # output group size, 0 for no grouping
    strip: bool = True      # drop symbols the alphabet cannot encode
    upper: bool = True      # upper-case input before conversion


# ────────────────────────────────────────────────────────────────────────
#  1. JSON machine descriptions
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object at top level")
    if "suite" not in data:
        missing = REQUIRED_KEYS - data.keys()
        if missing:
            raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")
    debug.log("config", f"loaded {path}")
    return data


def build_catalog(alphabet: Alphabet, entries: List[Dict[str, Any]]) -> List[Rotor]:
    """Turn JSON rotor entries into rotor objects over ALPHABET."""
    rotors: List[Rotor] = []
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigError(f"Rotor entry must be an object with a name: {entry!r}")
        name = entry["name"]
        kind = entry.get("kind", "moving")

        if "wiring" in entry:
            perm = Permutation.from_wiring(entry["wiring"], alphabet)
        elif "cycles" in entry:
            perm = Permutation(entry["cycles"], alphabet)
        else:
            raise ConfigError(f"Rotor {name} needs either 'wiring' or 'cycles'")

        rotors.append(make_rotor(kind, name, perm, entry.get("notches", "")))
    return rotors


def build_machine(data: dict) -> Machine:
    """Build a machine from a loaded description and apply its `setup`, if any."""
    if "suite" in data:
        machine = build_suite(data["suite"])
    else:
        alphabet = Alphabet(data["alphabet"])
        machine = Machine(
            alphabet,
            int(data["slots"]),
            int(data["pawls"]),
            build_catalog(alphabet, data["rotors"]),
        )

    setup = data.get("setup")
    if setup:
        if not isinstance(setup, dict) or "rotors" not in setup:
            raise ConfigError("Missing key in setup: rotors")
        plugboard = setup.get("plugboard")
        apply_setup(
            machine,
            setup["rotors"],
            setup.get("setting", machine.alphabet.to_char(0) * (machine.num_rotors - 1)),
            setup.get("ring"),
            Permutation(plugboard, machine.alphabet) if plugboard else None,
        )
    return machine


# ────────────────────────────────────────────────────────────────────────
#  2. Settings lines  ("* B BETA III IV I AXLE (HQ) (EX)")
# ────────────────────────────────────────────────────────────────────────


def apply_setup(
    machine: Machine,
    rotors: List[str],
    setting: str,
    ring: str | None = None,
    plugboard: Permutation | None = None,
) -> None:
    """Check every part first, then insert, set, ring and plug in that order."""
    machine.check_setting(setting)
    if ring is not None:
        machine.check_setting(ring)
    if plugboard is not None:
        machine.check_plugboard(plugboard)

    machine.insert_rotors(rotors)
    machine.set_rotors(setting)
    if ring is not None:
        machine.set_ring_rotors(ring)
    machine.set_plugboard(plugboard)


def is_settings_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def parse_settings(line: str, machine: Machine) -> None:
    body = line.strip()
    if not body.startswith("*"):
        raise ConfigError(f"Settings line must start with '*': {line!r}")

    words = body[1:].split()
    n = machine.num_rotors
    if len(words) < n + 1:
        raise ConfigError(f"Settings line needs {n} rotor names and a setting: {line!r}")

    names, setting, rest = words[:n], words[n], words[n + 1:]
    ring = None
    if rest and not rest[0].startswith("("):
        ring = rest.pop(0)
    plugboard = Permutation(" ".join(rest), machine.alphabet) if rest else None

    apply_setup(machine, names, setting, ring, plugboard)
    debug.log("config", f"applied {body}")


# ────────────────────────────────────────────────────────────────────────
#  3. Text preprocessing & output grouping
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alphabet: Alphabet, cfg: Config) -> str:
    """Upper‑case if asked, drop whitespace, and drop non‑alphabet chars if asked."""
    text = msg.upper() if cfg.upper else msg
    text = "".join(ch for ch in text if not ch.isspace())
    if cfg.strip:
        text = "".join(ch for ch in text if ch in alphabet)
    return text


def group(text: str, block: int) -> str:
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))
