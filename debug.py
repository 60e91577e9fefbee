# debug.py
from __future__ import annotations
import logging
from typing import Dict

LOGGER_NAME = "enigma"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"


class Debug:
    _root_configured: bool = False          # class-level guard

    # component map shared by every instance
    _components: Dict[str, bool] = {
        "alphabet":    False,
        "permutation": False,
        "rotor":       False,
        "stepping":    False,
        "plugboard":   False,
        "machine":     False,
        "config":      False,
    }

    def __init__(self) -> None:
        self.logger = logging.getLogger(LOGGER_NAME)

    @classmethod
    def configure(cls, *, log_to: str | None = None, level: int = logging.DEBUG) -> None:
        """
        Install the root handlers once. If `log_to` is given, messages also
        stream to that file. Only the command line calls this; library code
        leaves handler setup to its caller.
        """
        if cls._root_configured:
            return
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_to:
            handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )
        cls._root_configured = True

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if Debug._components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def active(self, component: str) -> bool:
        """True when `component` would currently be logged."""
        return Debug._components.get(component, False)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in Debug._components.items() if v]
        return f"<Debug active={active}>"
