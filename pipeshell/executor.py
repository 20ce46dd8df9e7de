"""
Process orchestration.

A descriptor is either handled in the shell process (parent built-ins)
or launched in one forked child. For `a | b` that child forks once
more: the grandchild runs `a` writing into the pipe, the child runs `b`
reading from it. The shell waits only on its immediate child, or
records it as a background job.
"""
import logging
import os
import sys
from dataclasses import dataclass

from pipeshell.builtin import CHILD_BUILTINS, PARENT_BUILTINS
from pipeshell.config import EXIT_EXEC_FAILED, EXIT_REDIRECT_FAILED, REDIRECT_MODE
from pipeshell.errors import ShellError
from pipeshell.job_control import Job, JobTable
from pipeshell.process import Child, run_child, spawn, wait_for
from pipeshell.signals import restore_exec_defaults

logger = logging.getLogger(__name__)

STDIN_FILENO = 0
STDOUT_FILENO = 1


@dataclass(frozen=True)
class ForegroundCompleted:
    status: int


@dataclass(frozen=True)
class Backgrounded:
    job: Job


@dataclass(frozen=True)
class BuiltinHandledInParent:
    status: int


@dataclass(frozen=True)
class Error:
    message: str


def report(message):
    print(f"pipeshell: {message}", file=sys.stderr)


def redirect_stdout(target):
    """Point fd 1 at target, created owner-only and truncated"""
    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, REDIRECT_MODE)
    try:
        os.dup2(fd, STDOUT_FILENO)
    finally:
        os.close(fd)


class Executor:
    def __init__(self, jobs=None, parent_builtins=None, child_builtins=None):
        self.jobs = JobTable() if jobs is None else jobs
        self.parent_builtins = PARENT_BUILTINS if parent_builtins is None else parent_builtins
        self.child_builtins = CHILD_BUILTINS if child_builtins is None else child_builtins

    def run(self, desc):
        """
        Execute a PipelineDescriptor.
        Returns: ForegroundCompleted, Backgrounded, BuiltinHandledInParent or Error
        """
        handler = self.parent_builtins.get(desc.command)
        if handler is not None:
            try:
                return BuiltinHandledInParent(handler(desc.stage1[1:], self))
            except ShellError as e:
                return Error(str(e))

        logger.debug("launching %r", desc)
        try:
            result = spawn()
        except OSError as e:
            return Error(f"fork: {e.strerror}")

        if isinstance(result, Child):
            run_child(self._child_main, desc)
        return self._parent_main(desc, result.pid)

    # ---------- Parent side ----------

    def _parent_main(self, desc, pid):
        if desc.background:
            job = self.jobs.append(desc.text, pid)
            print(f"[{len(self.jobs)}] {pid}")
            return Backgrounded(job)
        return ForegroundCompleted(wait_for(pid))

    # ---------- Child side ----------

    def _child_main(self, desc):
        """Body of the forked child. Returns the child's exit status"""
        if desc.piped:
            return self._run_pipe(desc)
        return self._run_final_stage(desc.final_stage, desc.redirect_target)

    def _run_final_stage(self, argv, redirect_target):
        if redirect_target is not None:
            try:
                redirect_stdout(redirect_target)
            except OSError as e:
                report(f"{redirect_target}: {os.strerror(e.errno)}")
                return EXIT_REDIRECT_FAILED
        return self._exec_stage(argv)

    def _run_pipe(self, desc):
        try:
            read_fd, write_fd = os.pipe()
            result = spawn()
        except OSError as e:
            report(f"pipe: {os.strerror(e.errno)}")
            return EXIT_EXEC_FAILED

        if isinstance(result, Child):
            run_child(self._run_writer, desc.stage1, read_fd, write_fd)

        try:
            os.close(write_fd)
            os.dup2(read_fd, STDIN_FILENO)
            os.close(read_fd)
        except OSError as e:
            report(f"pipe: {os.strerror(e.errno)}")
            return EXIT_EXEC_FAILED
        return self._run_final_stage(desc.final_stage, desc.redirect_target)

    def _run_writer(self, argv, read_fd, write_fd):
        try:
            os.close(read_fd)
            os.dup2(write_fd, STDOUT_FILENO)
            os.close(write_fd)
        except OSError as e:
            report(f"pipe: {os.strerror(e.errno)}")
            return EXIT_EXEC_FAILED
        return self._exec_stage(argv)

    def _exec_stage(self, argv):
        """Run a child built-in, or replace this process with argv[0]"""
        # A built-in writing into a closed pipe dies of SIGPIPE like a program would
        restore_exec_defaults()
        handler = self.child_builtins.get(argv[0])
        if handler is not None:
            return handler(argv[1:], self)

        logger.debug("exec %s", argv)
        try:
            os.execvp(argv[0], argv)
        except FileNotFoundError:
            report(f"{argv[0]}: command not found")
        except OSError as e:
            report(f"{argv[0]}: {e.strerror}")
        return EXIT_EXEC_FAILED
