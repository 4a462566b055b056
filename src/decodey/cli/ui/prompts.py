from __future__ import annotations

from enum import StrEnum

import attrs
from rich.console import Console
from rich.prompt import Prompt

from decodey.core.cipher import is_cipher_letter

HINT_WORDS = {"?", "hint"}
QUIT_WORDS = {"quit", "exit"}


class MoveKind(StrEnum):
    SELECT = "select"
    HINT = "hint"
    QUIT = "quit"


@attrs.frozen(slots=True)
class Move:
    kind: MoveKind
    letter: str | None = None
    guess: str | None = None


def parse_move(raw: str) -> Move | None:
    """Parse player input.

    Accepts a cipher letter (``X``), a cipher letter followed by a guess
    (``XE``), ``?``/``hint`` or ``quit``/``exit``. Returns None for anything
    else. Single letters are always letters, so H and Q stay selectable.
    """
    normalized = raw.strip().lower()
    if normalized in HINT_WORDS:
        return Move(MoveKind.HINT)
    if normalized in QUIT_WORDS:
        return Move(MoveKind.QUIT)
    letters = normalized.replace(" ", "").replace("=", "").upper()
    if len(letters) == 1 and is_cipher_letter(letters):
        return Move(MoveKind.SELECT, letter=letters)
    if len(letters) == 2 and all(is_cipher_letter(char) for char in letters):
        return Move(MoveKind.SELECT, letter=letters[0], guess=letters[1])
    return None


def ask_move(console: Console) -> Move:
    while True:
        response = Prompt.ask(
            "Cipher letter to decode (or XY to guess Y for X, ? for a hint, quit)",
            console=console,
        )
        move = parse_move(response)
        if move is not None:
            return move
        console.print("[red]Enter a letter A-Z, two letters, '?' or 'quit'.[/red]")


def ask_guess(console: Console, cipher_letter: str) -> str:
    while True:
        response = Prompt.ask(f"Plain letter for {cipher_letter}", console=console)
        letter = response.strip().upper()
        if is_cipher_letter(letter):
            return letter
        console.print("[red]Please enter a single letter A-Z.[/red]")
