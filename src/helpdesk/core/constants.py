"""Core constants."""

ROOT_NODE_ID = "root"

BACK_TO_START_LABEL = "Go back to the start."

DIGIT_NAMES = ("zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine")

# Keycap emoji for 0-9
DEFAULT_DIGIT_EMOJIS: tuple[str, ...] = tuple(f"{d}\ufe0f\u20e3" for d in "0123456789")
