# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from typing import TextIO

from catalog import SUITES, build_suite
from config import (
    Config,
    apply_setup,
    build_machine,
    group,
    is_settings_line,
    load_config,
    parse_settings,
    preprocess_message,
)
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation

# ────────────────────────────────────────────────────────────────────────
#  0. Logging
# ────────────────────────────────────────────────────────────────────────

debug = Debug()


def setup_logging(components: str | None, log_to: str | None) -> None:
    if not components:
        return
    Debug.configure(log_to=log_to)
    names = list(debug.status()) if components == "all" else components.split(",")
    debug.enable(*(name.strip() for name in names if name.strip()))


# ────────────────────────────────────────────────────────────────────────
#  1. Machine construction
# ────────────────────────────────────────────────────────────────────────


def build_from_args(args: argparse.Namespace) -> Machine:
    if args.config:
        machine = build_machine(load_config(args.config))
    else:
        machine = build_suite(args.suite)

    if args.rotors:
        alpha = machine.alphabet
        if args.plugboard:
            plugboard = Permutation(args.plugboard, alpha)
        elif args.plugs:
            plugboard = Permutation.from_pairs(args.plugs, alpha)
        else:
            plugboard = None
        setting = args.setting or alpha.to_char(0) * (machine.num_rotors - 1)
        apply_setup(machine, args.rotors.split(), setting, args.ring, plugboard)
    elif args.setting or args.ring or args.plugboard or args.plugs:
        raise ConfigError("--setting, --ring and plugboard options need --rotors")

    return machine


# ────────────────────────────────────────────────────────────────────────
#  2. Batch processing
# ────────────────────────────────────────────────────────────────────────


def process_lines(lines: Iterable[str], machine: Machine, cfg: Config, out: TextIO) -> None:
    """Convert message lines; '*' lines reconfigure the machine as they arrive."""
    for raw in lines:
        line = raw.rstrip("\n")
        if is_settings_line(line):
            parse_settings(line, machine)
            continue
        if not line.strip():
            print(file=out)
            continue
        if not machine.rotors:
            raise ConfigError("Message before any rotor configuration")
        clean = preprocess_message(line, machine.alphabet, cfg)
        print(group(machine.convert_message(clean), cfg.block), file=out)


# ────────────────────────────────────────────────────────────────────────
#  3. CLI
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--suite", default="I", choices=sorted(SUITES), help="Built-in machine model. Default: I")
    src.add_argument("--config", metavar="FILE", help="Load the alphabet, wheels and setup from JSON.")

    p.add_argument("--rotors", metavar="NAMES", help='Rotor names, reflector first, e.g. "B III II I".')
    p.add_argument("--setting", metavar="KEY", help="Window letters of the non-reflector slots.")
    p.add_argument("--ring", metavar="RING", help="Ring settings, one letter per non-reflector slot.")
    plug = p.add_mutually_exclusive_group()
    plug.add_argument("--plugboard", metavar="CYCLES", help='Plugboard in cycle notation, e.g. "(AB) (CD)".')
    plug.add_argument("--plugs", metavar="PAIRS", help='Plugboard as pairs, e.g. "AB CD".')

    text = p.add_mutually_exclusive_group()
    text.add_argument("-m", "--message", metavar="TEXT", help="Convert TEXT and exit.")
    text.add_argument("-i", "--input", metavar="FILE", help="Read message and '*' settings lines from FILE. Default: stdin")
    p.add_argument("--block", type=int, default=5, help="Output group size, 0 for none. Default: 5")
    p.add_argument("--keep", action="store_true", help="Fail on symbols outside the alphabet instead of dropping them.")

    p.add_argument("--debug", metavar="COMPONENTS", help="Comma-separated log components, or 'all'.")
    p.add_argument("--log", metavar="FILE", help="Also write debug output to FILE.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, strip=not args.keep)

    try:
        setup_logging(args.debug, args.log)
        machine = build_from_args(args)

        if args.message is not None:
            process_lines([args.message], machine, cfg, sys.stdout)
        elif args.input:
            with open(args.input, encoding="utf-8") as fh:
                process_lines(fh, machine, cfg, sys.stdout)
        else:
            process_lines(sys.stdin, machine, cfg, sys.stdout)
    except (OSError, ValueError) as e:
        sys.exit(f"❌  {e}")


if __name__ == "__main__":
    main()
