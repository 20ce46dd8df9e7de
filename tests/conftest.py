import os
import signal
import subprocess
import sys
from pathlib import Path

import pytest

from pipeshell.executor import Executor
from pipeshell.job_control import JobTable

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def executor():
    """Executor that runs every stage as an external program"""
    return Executor(jobs=JobTable(), child_builtins={})


@pytest.fixture
def restore_signals():
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTSTP)}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)


@pytest.fixture
def run_shell(tmp_path):
    """Run main.py in a fresh session so `exit` cannot reach pytest"""

    def run(*args, input=None, cwd=None):
        env = dict(os.environ, PIPESHELL_HISTORY=str(tmp_path / "history"))
        return subprocess.run(
            [sys.executable, str(ROOT / "main.py"), *args],
            input=input,
            cwd=cwd or tmp_path,
            env=env,
            capture_output=True,
            text=True,
            timeout=30,
            start_new_session=True,
        )

    return run
