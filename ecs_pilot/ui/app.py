"""Textual application running the ECS Pilot shell."""

import logging
import threading
from functools import partial

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.reactive import reactive
from textual.widgets import Footer, Input, RichLog
from textual.worker import Worker, WorkerState

from ecs_pilot.aws.adapter import ECSAdapter
from ecs_pilot.shell import Shell
from ecs_pilot.ui.debug_console import DebugConsole, TextualLogHandler

logger = logging.getLogger(__name__)


class ShellApp(App):
    """Shell with an output log, a command line and a debug console."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("f2", "toggle_debug_console", "Debug"),
    ]

    debug_console_visible: reactive[bool] = reactive(False)

    def __init__(self, adapter: ECSAdapter, prompt: str = "> ", **kwargs):
        """Initialize the application.

        Args:
            adapter: ECS adapter executing the commands
            prompt: Prefix echoed in front of each submitted command
            **kwargs: Additional arguments for App
        """
        super().__init__(**kwargs)
        self.prompt = prompt
        self.shell = Shell(adapter, write=self._write_threadsafe)
        # Every line written to the output log, in order
        self.transcript: list[str] = []
        self._app_thread = threading.get_ident()
        self._log_handler: TextualLogHandler | None = None

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield RichLog(id="output", wrap=True, markup=False, highlight=False)
        yield Input(placeholder="Type a command (help for a list)", id="command-input")
        yield DebugConsole(id="debug-console")
        yield Footer()

    def on_mount(self) -> None:
        """Attach the debug console to logging and focus the command line."""
        self._app_thread = threading.get_ident()
        debug_console = self.query_one("#debug-console", DebugConsole)
        self._log_handler = TextualLogHandler(debug_console, self)
        logging.getLogger().addHandler(self._log_handler)

        self.query_one("#command-input", Input).focus()

    def on_unmount(self) -> None:
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)

    def _write(self, line: str) -> None:
        self.transcript.append(line)
        self.query_one("#output", RichLog).write(line)

    def _write_threadsafe(self, line: str) -> None:
        """Write from the UI thread, a command worker or a wait callback."""
        if threading.get_ident() == self._app_thread:
            self._write(line)
        elif self.is_running:
            self.call_from_thread(self._write, line)
        else:
            logger.info(line)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Run the submitted line in a worker thread."""
        line = event.value
        command_input = self.query_one("#command-input", Input)
        command_input.value = ""
        self._write(f"{self.prompt}{line}")

        # One command at a time, like the terminal shell
        command_input.disabled = True
        self.run_worker(
            partial(self.shell.execute, line),
            name="execute",
            thread=True,
            exclusive=True,
            exit_on_error=False,
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Re-enable input after a command, or exit after quit."""
        if event.worker.name != "execute":
            return

        if event.state == WorkerState.SUCCESS:
            if event.worker.result is False:
                self.exit()
                return
        elif event.state == WorkerState.ERROR:
            logger.error(f"Command failed: {event.worker.error}")
            self._write(f"Error - {event.worker.error}.")
        else:
            return

        command_input = self.query_one("#command-input", Input)
        command_input.disabled = False
        command_input.focus()

    def action_toggle_debug_console(self) -> None:
        """Toggle the debug console visibility."""
        self.debug_console_visible = not self.debug_console_visible

    def watch_debug_console_visible(self, visible: bool) -> None:
        """Update debug console visibility when state changes."""
        console = self.query_one("#debug-console", DebugConsole)
        if visible:
            console.add_class("visible")
        else:
            console.remove_class("visible")
