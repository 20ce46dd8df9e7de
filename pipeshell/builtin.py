"""
Built-in commands.

Every built-in is called as handler(args, shell) and returns an exit
code. PARENT_BUILTINS run inside the shell process itself because they
change its directory or job table; CHILD_BUILTINS run in the forked
child so pipes and redirection apply to their output.
"""
import os

from pipeshell.errors import LaunchError
from pipeshell.history import save_history, show_history
from pipeshell.job_control import foreground, parse_job_index, show_jobs
from pipeshell.signals import terminate_group


def builtin_help(args, shell):
    """Print help message"""
    print("""pipeshell help:
 Built-in commands:
  cd [dir]      : change directory
  fg [n]        : wait for background job n (default 1)
  jobs          : list background jobs
  history       : show command history
  echo [args]   : print arguments
  pwd           : print working directory
  exit          : terminate the shell and all its jobs
  help          : print this help

Features:
  Pipe using a | b
  Redirect output using > file
  Background with trailing &
""")
    return 0


def builtin_cd(args, shell):
    """Change directory"""
    if len(args) > 1:
        raise LaunchError("cd: too many arguments")
    path = os.path.expanduser(args[0] if args else "~")
    try:
        os.chdir(path)
    except OSError as e:
        raise LaunchError(f"cd: {path}: {e.strerror}") from None
    return 0


def builtin_fg(args, shell):
    """Bring a background job to the foreground"""
    return foreground(shell.jobs, parse_job_index(args))


def builtin_jobs(args, shell):
    show_jobs(shell.jobs)
    return 0


def builtin_history(args, shell):
    show_history()
    return 0


def builtin_exit(args, shell):
    """Kill the whole process group; background jobs go with it"""
    save_history()
    terminate_group()
    return 0


def builtin_echo(args, shell):
    print(" ".join(args))
    return 0


def builtin_pwd(args, shell):
    print(os.getcwd())
    return 0


PARENT_BUILTINS = {
    'cd': builtin_cd,
    'fg': builtin_fg,
    'jobs': builtin_jobs,
    'history': builtin_history,
    'help': builtin_help,
    'exit': builtin_exit,
}

CHILD_BUILTINS = {
    'echo': builtin_echo,
    'pwd': builtin_pwd,
}
