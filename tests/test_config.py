import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from alphabet import Alphabet
from catalog import SUITES, WHEELS, build_suite, rotor_catalog
from config import (
    Config,
    build_catalog,
    build_machine,
    group,
    is_settings_line,
    load_config,
    parse_settings,
    preprocess_message,
)
from errors import ConfigError, CycleSyntaxError, RotorLookupError
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector

SMALL = {
    "alphabet": "ABCD",
    "slots": 3,
    "pawls": 2,
    "rotors": [
        {"name": "R", "kind": "reflector", "cycles": "(AC) (BD)"},
        {"name": "X", "kind": "moving", "cycles": "(ABCD)", "notches": "C"},
        {"name": "Y", "wiring": "BADC", "notches": "B"},
        {"name": "F", "kind": "fixed", "cycles": "(BD)"},
    ],
    "setup": {"rotors": ["R", "X", "Y"], "setting": "BC", "ring": "AB"},
}


class TestLoadConfig(unittest.TestCase):
    def write(self, tmp: str, data: object) -> Path:
        path = Path(tmp) / "machine.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_load_and_build(self) -> None:
        with TemporaryDirectory() as tmp:
            machine = build_machine(load_config(self.write(tmp, SMALL)))
        self.assertEqual(machine.num_rotors, 3)
        self.assertEqual(machine.num_pawls, 2)
        self.assertEqual([r.name for r in machine.rotors], ["R", "X", "Y"])
        self.assertEqual(machine.positions(), "BC")
        self.assertEqual([r.ring for r in machine.rotors], [0, 0, 1])

    def test_missing_keys(self) -> None:
        with TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError) as ctx:
                load_config(self.write(tmp, {"alphabet": "ABCD", "rotors": []}))
        self.assertIn("pawls", str(ctx.exception))
        self.assertIn("slots", str(ctx.exception))

    def test_top_level_must_be_object(self) -> None:
        with TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError):
                load_config(self.write(tmp, ["ABCD"]))

    def test_suite_description(self) -> None:
        data = {"suite": "I", "setup": {"rotors": ["B", "I", "II", "III"], "setting": "AAA"}}
        machine = build_machine(data)
        self.assertEqual(machine.convert_message("AAAAA"), "BDZGO")

    def test_setup_defaults_to_first_letter(self) -> None:
        data = dict(SMALL, setup={"rotors": ["R", "X", "Y"]})
        self.assertEqual(build_machine(data).positions(), "AA")

    def test_rotor_entry_must_be_object(self) -> None:
        with self.assertRaises(ConfigError):
            build_catalog(Alphabet("AB"), ["X"])
        with self.assertRaises(ConfigError):
            build_machine(dict(SMALL, rotors=[42]))

    def test_setup_without_rotors(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            build_machine({"suite": "I", "setup": {"setting": "AAA"}})
        self.assertIn("rotors", str(ctx.exception))

    def test_catalog_entries(self) -> None:
        rotors = build_catalog(Alphabet("ABCD"), SMALL["rotors"])
        self.assertEqual([type(r) for r in rotors], [Reflector, MovingRotor, MovingRotor, FixedRotor])
        self.assertEqual(rotors[2].permutation.cycles, ("AB", "CD"))
        with self.assertRaises(ConfigError):
            build_catalog(Alphabet("ABCD"), [{"name": "Q", "kind": "moving"}])
        with self.assertRaises(ConfigError):
            build_catalog(Alphabet("ABCD"), [{"kind": "moving", "cycles": "(AB)"}])


class TestCatalog(unittest.TestCase):
    def test_every_wheel_builds(self) -> None:
        rotors = rotor_catalog()
        self.assertEqual(len(rotors), len(WHEELS))
        reflectors = [r for r in rotors if r.reflecting()]
        self.assertTrue(all(r.permutation.derangement() for r in reflectors))
        self.assertTrue(all(len(c) == 2 for r in reflectors for c in r.permutation.cycles))

    def test_suites(self) -> None:
        for name, model in SUITES.items():
            machine = build_suite(name.lower())
            self.assertEqual(machine.num_rotors, model["slots"])
            self.assertEqual(sorted(machine.available()), sorted(model["wheels"]))
        with self.assertRaises(ConfigError):
            build_suite("M5")
        with self.assertRaises(ConfigError):
            rotor_catalog(["IX"])


class TestSettingsLine(unittest.TestCase):
    def setUp(self) -> None:
        self.machine = build_suite("I")

    def test_plain_line(self) -> None:
        self.assertTrue(is_settings_line("  * B I II III AAA"))
        self.assertFalse(is_settings_line("HELLO"))
        parse_settings("* B I II III AAA", self.machine)
        self.assertEqual(self.machine.convert_message("AAAAA"), "BDZGO")

    def test_ring_word(self) -> None:
        parse_settings("* B I II III AAA BBB", self.machine)
        self.assertEqual(self.machine.convert_message("AAAAA"), "EWTYX")

    def test_plugboard_words(self) -> None:
        parse_settings("*B I II III AAA (AB) (CD)", self.machine)
        self.assertEqual(self.machine.plugboard.cycles, ("AB", "CD"))
        self.assertEqual([r.ring for r in self.machine.rotors], [0, 0, 0, 0])

    def test_new_line_clears_plugboard(self) -> None:
        parse_settings("* B I II III AAA (AB)", self.machine)
        parse_settings("* B I II III AAA", self.machine)
        self.assertIsNone(self.machine.plugboard)

    def test_bad_lines(self) -> None:
        with self.assertRaises(ConfigError):
            parse_settings("B I II III AAA", self.machine)
        with self.assertRaises(ConfigError):
            parse_settings("* B I II III", self.machine)
        with self.assertRaises(RotorLookupError):
            parse_settings("* B I II IX AAA", self.machine)
        with self.assertRaises(CycleSyntaxError):
            parse_settings("* B I II III AAA (AB", self.machine)

    def test_failed_line_keeps_previous_setup(self) -> None:
        parse_settings("* B I II III QEV", self.machine)
        for bad in ["* C V IV III AAA (ABC)", "* C V IV III AAAA", "* C V IV III AAA BB"]:
            with self.subTest(line=bad):
                with self.assertRaises(ConfigError):
                    parse_settings(bad, self.machine)
                self.assertEqual([r.name for r in self.machine.rotors], ["B", "I", "II", "III"])
                self.assertEqual(self.machine.positions(), "QEV")


class TestText(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = Config()
        self.assertEqual((cfg.block, cfg.strip, cfg.upper), (5, True, True))

    def test_preprocess(self) -> None:
        alpha = Alphabet()
        self.assertEqual(preprocess_message("Hello, World!", alpha, Config()), "HELLOWORLD")
        self.assertEqual(preprocess_message("ab c", alpha, Config(upper=False)), "")
        self.assertEqual(preprocess_message("a b!", alpha, Config(strip=False)), "AB!")

    def test_group(self) -> None:
        self.assertEqual(group("HELLOWORLDX", 5), "HELLO WORLD X")
        self.assertEqual(group("HELLOWORLD", 0), "HELLOWORLD")
        self.assertEqual(group("", 5), "")


if __name__ == "__main__":
    unittest.main()
