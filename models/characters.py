"""Character sets shared by the prediction and entry components."""

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
SPACE = " "
START_MARKER = SPACE
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()."
SPACE_AFTER_PUNCTUATION = ".,!?;:"


def normalize_char(char: str | None) -> str:
    """Lower-case a character, treating None or empty input as a space."""
    return (char or SPACE).lower()


def is_letter(char: str) -> bool:
    """True for a single character of the 26-letter lower-case alphabet."""
    return len(char) == 1 and char in ALPHABET
