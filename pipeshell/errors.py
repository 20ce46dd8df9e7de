class ShellError(Exception):
    """Base class for errors reported at the prompt"""


class ParseError(ShellError):
    """Malformed line: bad '>' or '|' usage, missing command"""


class ArgsOverflowError(ParseError):
    """Line holds more tokens than ARGS_SIZE"""

    def __init__(self, count, capacity):
        super().__init__(f"too many arguments ({count} > {capacity})")
        self.count = count
        self.capacity = capacity


class LaunchError(ShellError):
    """Command was understood but cannot be started"""


class ShellExit(ShellError):
    """Raised to leave the interactive loop"""

    def __init__(self, status=0):
        super().__init__(f"exit {status}")
        self.status = status
