"""Debug console widget fed by the logging module."""

import logging
import threading

from textual.app import App
from textual.widgets import RichLog


class DebugConsole(RichLog):
    """Collapsible log panel showing application log records."""

    DEFAULT_CSS = """
    DebugConsole {
        display: none;
        height: 10;
        border-top: solid $accent;
    }
    DebugConsole.visible {
        display: block;
    }
    """

    def __init__(self, **kwargs):
        super().__init__(wrap=True, markup=False, highlight=False, **kwargs)
        self.records: list[str] = []

    def add_record(self, message: str) -> None:
        """Append a formatted log record."""
        self.records.append(message)
        self.write(message)


class TextualLogHandler(logging.Handler):
    """Logging handler that forwards records to a DebugConsole."""

    def __init__(self, console: DebugConsole, app: App):
        super().__init__()
        self.console = console
        self.app = app
        self._app_thread = threading.get_ident()
        self.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if threading.get_ident() == self._app_thread:
                self.console.add_record(message)
            elif self.app.is_running:
                self.app.call_from_thread(self.console.add_record, message)
        except Exception:
            self.handleError(record)
