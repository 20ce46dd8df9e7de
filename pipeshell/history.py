import os
import sys
import readline

from pipeshell.config import HISTORY_FILE, MAX_HISTORY
from pipeshell.errors import ShellExit

# History is only kept for interactive sessions, once init_history() ran
_enabled = False


def init_history():
    """Turn on history and emacs-style line editing"""
    global _enabled
    _enabled = True
    if sys.stdin.isatty():
        readline.parse_and_bind("set editing-mode emacs")


def load_history(path=HISTORY_FILE):
    if not _enabled:
        return
    try:
        if os.path.exists(path):
            readline.read_history_file(path)
        readline.set_history_length(MAX_HISTORY)
    except OSError as e:
        print(f"Warning: Could not load history: {e}", file=sys.stderr)


def save_history(path=HISTORY_FILE):
    if not _enabled:
        return
    try:
        readline.set_history_length(MAX_HISTORY)
        readline.write_history_file(path)
    except OSError as e:
        print(f"Warning: Could not save history: {e}", file=sys.stderr)


def show_history():
    """Print the session history; empty when running `-c`"""
    if not _enabled:
        return
    for i in range(1, readline.get_current_history_length() + 1):
        print(f"{i}\t{readline.get_history_item(i)}")


def read_line(prompt):
    """
    Read one line from the terminal.
    Raises ShellExit(0) at end of input.
    """
    try:
        return input(prompt)
    except EOFError:
        raise ShellExit(0) from None
