"""terminal input/output helpers"""

import math
from typing import Callable

from termcolor import cprint, colored
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

from pizza_store.errors import InvalidInputError

# fix windows terminal misinterpreting ansi escape sequences
enable_windows_ansi_interpretation()


# sqlite INTEGER is a signed 64-bit value
MAX_INT = 2**63 - 1


# helpers
def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum"""
    try:
        v = int(value.strip())
        if minimum is not None and v < minimum:
            return None
        if not -MAX_INT <= v <= MAX_INT:
            return None
        return v
    except ValueError:
        return None


def safe_float(value: str):
    """return a finite float or none if invalid"""
    try:
        v = float(value.strip())
        return v if math.isfinite(v) else None
    except ValueError:
        return None


def truncate(value: str, limit: int) -> str:
    return value[:limit]


def color_money(amount: float) -> str:
    """format amount as green money string"""
    return colored(f"${amount:.2f}", "green")


def parse_boolean_input(prompt: str) -> bool:
    """parse y/n style input; anything else is no"""
    p = prompt.lower().strip()
    if p in ("y", "yes"):
        return True
    return False


class Console:
    """the input source every handler reads from

    `reader` takes a prompt and returns one line; defaults to `input`. tests pass a
    scripted reader instead.
    """
    def __init__(self, reader: Callable[[str], str] | None = None):
        self._reader = reader or input

    def ask(self, prompt: str) -> str:
        return self._reader(colored(prompt, "magenta")).strip()

    def ask_int(self, prompt: str, minimum: int | None = None) -> int:
        """read an int or raise; used where a bad number aborts the handler"""
        raw = self.ask(prompt)
        value = safe_int(raw, minimum)
        if value is None:
            raise InvalidInputError(f"'{raw}' is not a valid number")
        return value

    def ask_float(self, prompt: str) -> float:
        raw = self.ask(prompt)
        value = safe_float(raw)
        if value is None:
            raise InvalidInputError(f"'{raw}' is not a valid amount")
        return value

    def confirm(self, prompt: str) -> bool:
        return parse_boolean_input(self.ask(f"{prompt} (y/N): "))

    def choose(self, prompt: str = "please make your choice: ") -> int:
        """reprompt until a number is entered"""
        while True:
            value = safe_int(self._reader(colored(prompt, "blue")))
            if value is not None:
                return value
            cprint("your input is invalid!", "red")
