# src/market_maker/core/engine/confirm.py
from __future__ import annotations

import sys
from typing import TextIO

from src.market_maker.core.errors import InputReadError


def parse_yes_no(text: str) -> bool:
    """Empty answer, bare newline or anything starting with y/Y means yes."""
    if text == "" or text[0] in ("\n", "\r"):
        return True
    return text[0] in ("y", "Y")


class ConfirmationGate:
    """
    Human yes/no checkpoint between trade actions.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def ask(self, question: str) -> bool:
        self.stdout.write(f"{question} [Y/n] ")
        self.stdout.flush()
        try:
            line = self.stdin.readline()
        except (OSError, ValueError) as e:
            raise InputReadError(f"could not read answer: {e!r}", operation="confirm") from e

        # readline() gives "" only at EOF; an empty answer is "\n"
        if line == "":
            raise InputReadError("input closed (EOF)", operation="confirm")
        return parse_yes_no(line)
