"""Terminal line input with readline history."""

import logging
from pathlib import Path

try:
    import readline

    READLINE_AVAILABLE = True
except ImportError:
    READLINE_AVAILABLE = False

logger = logging.getLogger(__name__)

HISTORY_LENGTH = 1000


class ReadlineInput:
    """Callable line reader for ``Shell.run``.

    Use as a context manager to load the history file on entry and save it
    on exit.
    """

    def __init__(self, prompt: str = "> ", history_file: Path | None = None):
        self.prompt = prompt
        self.history_file = history_file

    def __enter__(self) -> "ReadlineInput":
        if READLINE_AVAILABLE and self.history_file is not None:
            readline.set_history_length(HISTORY_LENGTH)
            if self.history_file.exists():
                try:
                    readline.read_history_file(str(self.history_file))
                except OSError as e:
                    logger.warning(f"Could not read history file: {e}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if READLINE_AVAILABLE and self.history_file is not None:
            try:
                self.history_file.parent.mkdir(parents=True, exist_ok=True)
                readline.write_history_file(str(self.history_file))
            except OSError as e:
                logger.warning(f"Could not write history file: {e}")

    def __call__(self) -> str:
        """Read the next line.

        Ctrl-C discards the line being typed and prompts again.

        Raises:
            EOFError: At end-of-input (Ctrl-D)
        """
        while True:
            try:
                return input(self.prompt)
            except KeyboardInterrupt:
                print()
            except EOFError:
                print()
                raise
