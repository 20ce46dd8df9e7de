import os

from pipeshell.config import PROMPT_FORMAT


def get_prompt():
    """Current working directory followed by ' > '"""
    try:
        cwd = os.getcwd()
    except FileNotFoundError:
        cwd = "?"
    return PROMPT_FORMAT.format(cwd=cwd)
