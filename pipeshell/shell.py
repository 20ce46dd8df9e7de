import argparse
import logging
import sys

from pipeshell.config import ARGS_SIZE, LOG_LEVEL
from pipeshell.errors import ShellError, ShellExit
from pipeshell.executor import (
    BuiltinHandledInParent,
    Error,
    Executor,
    ForegroundCompleted,
    report,
)
from pipeshell.history import init_history, load_history, read_line, save_history
from pipeshell.parser import parse_command
from pipeshell.prompt import get_prompt
from pipeshell.signals import SignalPolicy

logger = logging.getLogger(__name__)


def run_line(executor, line, capacity=ARGS_SIZE):
    """
    Parse and execute one input line.
    Errors are reported and the line is dropped; nothing is spawned
    for a line that fails to parse.
    Returns: the Outcome, or None for an empty line
    """
    try:
        desc = parse_command(line, capacity)
    except ShellError as e:
        report(e)
        return Error(str(e))
    if desc is None:
        return None

    outcome = executor.run(desc)
    logger.debug("%s -> %r", desc.text, outcome)
    if isinstance(outcome, Error):
        report(outcome.message)
    return outcome


def exit_code(outcome):
    """Map an Outcome to a process exit status"""
    if isinstance(outcome, (ForegroundCompleted, BuiltinHandledInParent)):
        # Killed children report -signal
        return outcome.status if outcome.status >= 0 else 128 - outcome.status
    if isinstance(outcome, Error):
        return 1
    return 0


def main_loop(executor):
    """Prompt, read and run lines until end of input"""
    while True:
        try:
            line = read_line(get_prompt())
        except ShellExit as e:
            print()
            return e.status

        if not line.strip():
            continue
        run_line(executor, line)


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="pipeshell",
        description="Line-oriented shell with pipes, redirection and background jobs",
    )
    parser.add_argument("-c", dest="command", metavar="COMMAND",
                        help="run a single command line and exit")
    parser.add_argument("--log-level", default=LOG_LEVEL,
                        help="logging level for diagnostics (default: %(default)s)")
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(process)d %(name)s %(levelname)s: %(message)s",
    )

    SignalPolicy().install()
    executor = Executor()

    if args.command is not None:
        return exit_code(run_line(executor, args.command))

    init_history()
    load_history()
    try:
        return main_loop(executor)
    finally:
        save_history()
