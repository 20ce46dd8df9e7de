"""
Background job bookkeeping.

Jobs are numbered by position (1-based) in launch order. The number is
not a stable id: removing job 2 renumbers every job after it. Finished
jobs are not reaped automatically; they stay listed until `fg` waits
on them.
"""
import logging
from dataclasses import dataclass

import psutil

from pipeshell.errors import LaunchError
from pipeshell.process import wait_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Job:
    name: str
    pid: int


class JobTable:
    """Ordered collection of background jobs"""

    def __init__(self):
        self._jobs = []

    def __len__(self):
        return len(self._jobs)

    def __bool__(self):
        return bool(self._jobs)

    def __iter__(self):
        return iter(self._jobs)

    def append(self, name, pid):
        job = Job(name=name, pid=pid)
        self._jobs.append(job)
        logger.debug("job [%d] %d added: %s", len(self._jobs), pid, name)
        return job

    def list(self):
        """Lazily yield (index, name) pairs, 1-based, in launch order"""
        return ((i, job.name) for i, job in enumerate(self._jobs, start=1))

    def remove(self, index):
        """
        Remove the job at a 1-based position.
        Returns: the removed Job, or None if index is out of range
        """
        if index <= 0 or index > len(self._jobs):
            return None
        job = self._jobs.pop(index - 1)
        logger.debug("job [%d] %d removed", index, job.pid)
        return job


def parse_job_index(args):
    """`fg` takes at most one positive integer argument, default 1"""
    if len(args) > 1:
        raise LaunchError("fg: too many arguments")
    if not args:
        return 1
    try:
        index = int(args[0])
    except ValueError:
        raise LaunchError(f"fg: {args[0]}: invalid job number") from None
    if index <= 0:
        raise LaunchError(f"fg: {args[0]}: invalid job number")
    return index


def foreground(jobs, index=1):
    """
    Take job `index` out of the table and block until it terminates.
    Returns: the job's exit code
    """
    job = jobs.remove(index)
    if job is None:
        raise LaunchError(f"fg: {index}: no such job")

    print(job.name)
    try:
        return wait_for(job.pid)
    except ChildProcessError:
        raise LaunchError(f"fg: {index}: process {job.pid} is not a child of this shell") from None


def job_status(pid):
    """Live process status as reported by psutil"""
    try:
        if not psutil.pid_exists(pid):
            return "terminated"
        return psutil.Process(pid).status()
    except psutil.NoSuchProcess:
        return "terminated"
    except psutil.AccessDenied:
        return "unknown"


def show_jobs(jobs):
    """Print the job table with live status"""
    if not jobs:
        print("No background jobs.")
        return

    for (index, name), job in zip(jobs.list(), jobs):
        print(f"[{index}] {job.pid:<8} {name}  [{job_status(job.pid)}]")
