import re

from pipeshell.config import ARGS_SIZE
from pipeshell.errors import ArgsOverflowError

BACKGROUND = "&"
REDIRECT = ">"
PIPE = "|"
CONTROL_TOKENS = (REDIRECT, PIPE)

_SEPARATORS = re.compile(r"[ \t]")


def strip_background(line):
    """
    Scan backwards over trailing whitespace for a single '&'.
    Returns: (remaining line, background flag)
    """
    end = len(line)
    while end > 0 and (line[end - 1] == BACKGROUND or line[end - 1].isspace()):
        end -= 1
        if line[end] == BACKGROUND:
            return line[:end], True
    return line[:end], False


def tokenize(line, capacity=ARGS_SIZE):
    """
    Split a raw line into tokens.
    Returns: (tokens: list, background: bool)
    Raises ArgsOverflowError when there are more than `capacity` tokens;
    the caller must drop the whole line.
    """
    body, background = strip_background(line)
    tokens = [tok for tok in _SEPARATORS.split(body) if tok]
    if len(tokens) > capacity:
        raise ArgsOverflowError(len(tokens), capacity)
    return tokens, background
