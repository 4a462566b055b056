"""Substitution cipher primitives.

All letters are canonicalised to uppercase A-Z. Anything else (digits,
punctuation, whitespace, accented letters) is treated as a non-letter and
passes through encryption and display untouched.
"""

from __future__ import annotations

import random
import string
from collections import Counter
from collections.abc import Mapping

ALPHABET = string.ascii_uppercase
PLACEHOLDER = "█"


def is_cipher_letter(char: str) -> bool:
    return len(char) == 1 and char in ALPHABET


def normalize_letter(value: str) -> str:
    """Return ``value`` as a single uppercase letter or raise ValueError."""
    letter = value.strip().upper()
    if not is_cipher_letter(letter):
        raise ValueError(f"Expected a single letter A-Z, got {value!r}")
    return letter


def normalize_text(text: str) -> str:
    return text.upper()


def generate_mapping(rng: random.Random) -> dict[str, str]:
    """Uniformly random permutation of the alphabet (fixed points allowed)."""
    shuffled = list(ALPHABET)
    rng.shuffle(shuffled)
    return dict(zip(ALPHABET, shuffled, strict=True))


def invert_mapping(mapping: Mapping[str, str]) -> dict[str, str]:
    inverse = {value: key for key, value in mapping.items()}
    if len(inverse) != len(mapping):
        raise ValueError("Mapping is not a bijection")
    return inverse


def encrypt(text: str, encode_map: Mapping[str, str]) -> str:
    return "".join(encode_map.get(char, char) if is_cipher_letter(char) else char for char in text)


def decrypt(text: str, decode_map: Mapping[str, str]) -> str:
    return encrypt(text, decode_map)


def render_display(
    cipher_text: str, guessed_map: Mapping[str, str], placeholder: str = PLACEHOLDER
) -> str:
    chars: list[str] = []
    for char in cipher_text:
        if not is_cipher_letter(char):
            chars.append(char)
        else:
            chars.append(guessed_map.get(char, placeholder))
    return "".join(chars)


def letter_frequency(cipher_text: str) -> dict[str, int]:
    return dict(Counter(char for char in cipher_text if is_cipher_letter(char)))


def cipher_letters(cipher_text: str) -> set[str]:
    return {char for char in cipher_text if is_cipher_letter(char)}


def reveal(display_text: str, cipher_text: str, guessed_map: Mapping[str, str]) -> str:
    """Overlay every guessed letter onto ``display_text`` at its cipher positions."""
    chars = list(display_text)
    for index, char in enumerate(cipher_text):
        plain = guessed_map.get(char)
        if plain is not None:
            chars[index] = plain
    return "".join(chars)
