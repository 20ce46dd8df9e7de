import os

# Upper bound on tokens accepted from one line
ARGS_SIZE = int(os.getenv("PIPESHELL_ARGS_SIZE", "30"))

HISTORY_FILE = os.path.expanduser(os.getenv("PIPESHELL_HISTORY", "~/.pipeshell_history"))
MAX_HISTORY = 1000

# Redirect targets are created owner read/write only
REDIRECT_MODE = 0o600

EXIT_EXEC_FAILED = 127
EXIT_REDIRECT_FAILED = 1

LOG_LEVEL = os.getenv("PIPESHELL_LOG_LEVEL", "WARNING")

PROMPT_FORMAT = "{cwd} > "
