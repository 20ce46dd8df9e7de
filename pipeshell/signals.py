"""
Signal policy.

SIGTSTP is ignored everywhere; the ignore disposition survives exec so
external programs inherit it. SIGINT is swallowed by the root shell
process and kills any process forked from it that has not yet exec'd
(after exec the default disposition applies).
"""
import logging
import os
import signal

logger = logging.getLogger(__name__)


def make_sigint_handler(root_pid):
    """Build a SIGINT handler bound to the pid of the interactive shell"""

    def handle_sigint(signum, frame):
        if os.getpid() == root_pid:
            # Ctrl+C at the prompt only moves to a new line
            print()
            return
        os.kill(os.getpid(), signal.SIGKILL)

    return handle_sigint


class SignalPolicy:
    def __init__(self, root_pid=None):
        self.root_pid = os.getpid() if root_pid is None else root_pid

    def install(self):
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        signal.signal(signal.SIGINT, make_sigint_handler(self.root_pid))
        logger.debug("signal policy installed for root pid %d", self.root_pid)


def terminate_group():
    """Send SIGTERM to every process in our process group, ourselves included"""
    logger.debug("terminating process group of %d", os.getpid())
    os.kill(0, signal.SIGTERM)


def restore_exec_defaults():
    """
    Python ignores SIGPIPE at startup and exec keeps ignored signals
    ignored; put it back before a child runs its stage.
    SIGTSTP stays ignored.
    """
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)
