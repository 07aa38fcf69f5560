"""Read-eval-print loop dispatching commands to the ECS adapter."""

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from enum import Enum, auto

from botocore.exceptions import BotoCoreError, ClientError

from ecs_pilot.aws.adapter import ECSAdapter
from ecs_pilot.config import ConfigError
from ecs_pilot.exceptions import ECSPilotError
from ecs_pilot.shell import render
from ecs_pilot.shell.parser import Command, CommandParseError, help_lines, parse_line
from ecs_pilot.task_definition import task_definition_template

logger = logging.getLogger(__name__)

# Errors that abort the current command but never the shell
COMMAND_ERRORS = (ClientError, BotoCoreError, ECSPilotError, ConfigError)

Writer = Callable[[str], None]


class ShellState(Enum):
    """Shell lifecycle states."""

    RUNNING = auto()
    TERMINATED = auto()


class Shell:
    """Interactive ECS command shell.

    The shell is independent of where lines come from and where output goes:
    ``run`` pulls lines from a reader callable and every output line is handed
    to ``write``.
    """

    def __init__(self, adapter: ECSAdapter, write: Writer | None = None):
        """Initialize the shell.

        Args:
            adapter: ECS adapter executing the commands
            write: Receives each output line (default: print to stdout)
        """
        self.adapter = adapter
        self._write = write or print
        self.state = ShellState.RUNNING
        self.verbose = False
        self.last_command_failed = False
        self.pending_waits: list[Future] = []
        self._quiet_level = logging.getLogger().level

        self._handlers: dict[str, Callable[[Command], None]] = {
            "verbose": self._do_verbose,
            "help": self._do_help,
            "exit": self._do_quit,
            "quit": self._do_quit,
            "cluster list": self._do_list_clusters,
            "cluster describe": self._do_describe_cluster,
            "cluster create": self._do_create_cluster,
            "cluster delete": self._do_delete_cluster,
            "container list": self._do_list_container_instances,
            "container describe": self._do_describe_container_instance,
            "container describe-all": self._do_describe_all_container_instances,
            "container new": self._do_new_container_instance,
            "container stop": self._do_terminate_container_instance,
            "task list": self._do_list_tasks,
            "task describe-all": self._do_describe_all_tasks,
            "task run": self._do_run_task,
            "task stop": self._do_stop_task,
            "task-definition list": self._do_list_task_definitions,
            "task-definition describe": self._do_describe_task_definition,
            "task-definition register": self._do_register_task_definition,
            "task-definition template": self._do_task_definition_template,
        }

    def write(self, line: str = "") -> None:
        self._write(line)

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self._write(line)

    @property
    def running(self) -> bool:
        return self.state is ShellState.RUNNING

    def execute(self, line: str) -> bool:
        """Parse and run one input line.

        Args:
            line: Raw input line

        Returns:
            True while the shell keeps running, False once it has terminated
        """
        if not self.running:
            return False

        self.last_command_failed = False
        try:
            command = parse_line(line)
        except CommandParseError as e:
            self.last_command_failed = True
            self.write(f"Command error: {e}.")
            self.write("Type help for a list of commands.")
            return True

        if command is None:
            return True

        logger.debug(f"Dispatching {command.name} {dict(command.args)}")
        try:
            self._handlers[command.name](command)
        except COMMAND_ERRORS as e:
            self.last_command_failed = True
            logger.debug(f"{command.name} failed", exc_info=True)
            self.write(f"Error - {str(e).rstrip('.')}.")
        except Exception as e:
            self.last_command_failed = True
            logger.error(f"Unexpected error in {command.name}", exc_info=True)
            self.write(f"Error - {str(e).rstrip('.') or type(e).__name__}.")

        return self.running

    def run(self, read_line: Callable[[], str]) -> None:
        """Loop until end-of-input or an explicit quit.

        Args:
            read_line: Returns the next line; raises EOFError at end-of-input
        """
        while self.running:
            try:
                line = read_line()
            except EOFError:
                self.state = ShellState.TERMINATED
                break
            self.execute(line)

    def _track(self, future: Future, on_done: Callable[[Future], None]) -> None:
        """Report a wait when it finishes.

        ``pending_waits`` holds one future per unreported wait. It resolves
        after ``on_done`` has written its message and is dropped from the list
        at the same time.
        """
        reported: Future = Future()
        self.pending_waits.append(reported)

        def report(finished: Future) -> None:
            try:
                on_done(finished)
            finally:
                self.pending_waits.remove(reported)
                reported.set_result(None)

        future.add_done_callback(report)

    # Shell commands

    def _do_verbose(self, command: Command) -> None:
        self.verbose = not self.verbose
        root_logger = logging.getLogger()
        if self.verbose:
            root_logger.setLevel(logging.DEBUG)
            self.write("Verbose is on.")
        else:
            root_logger.setLevel(self._quiet_level)
            self.write("Verbose is off.")

    def _do_help(self, command: Command) -> None:
        self.write("Commands:")
        self.write_lines(help_lines())

    def _do_quit(self, command: Command) -> None:
        self.state = ShellState.TERMINATED

    # Clusters

    def _do_list_clusters(self, command: Command) -> None:
        self.write_lines(render.render_cluster_list(self.adapter.list_clusters()))

    def _do_describe_cluster(self, command: Command) -> None:
        cluster = self.adapter.describe_cluster(command["cluster_name"])
        self.write_lines(render.render_cluster(cluster))

    def _do_create_cluster(self, command: Command) -> None:
        cluster = self.adapter.create_cluster(command["cluster_name"])
        self.write(f"Created cluster {command['cluster_name']}.")
        self.write_lines(render.render_cluster(cluster))

    def _do_delete_cluster(self, command: Command) -> None:
        cluster = self.adapter.delete_cluster(command["cluster_name"])
        self.write(f"Deleted cluster {command['cluster_name']}.")
        self.write_lines(render.render_cluster(cluster))

    # Container instances

    def _do_list_container_instances(self, command: Command) -> None:
        cluster_name = command["cluster_name"]
        arns = self.adapter.list_container_instances(cluster_name)
        self.write_lines(render.render_container_instance_list(cluster_name, arns))

    def _do_describe_container_instance(self, command: Command) -> None:
        records = self.adapter.describe_container_instance(
            command["cluster_name"], command["instance_arn"]
        )
        self.write_lines(render.render_container_instance_records(records))

    def _do_describe_all_container_instances(self, command: Command) -> None:
        cluster_name = command["cluster_name"]
        records = self.adapter.describe_all_container_instances(cluster_name)
        if not records:
            self.write(f"There are no containers for: {cluster_name}.")
            return
        self.write_lines(render.render_container_instance_records(records))

    def _do_new_container_instance(self, command: Command) -> None:
        cluster_name = command["cluster_name"]
        instances = self.adapter.launch_container_instance(cluster_name)
        self.write_lines(render.render_launched_instances(cluster_name, instances))

    def _do_terminate_container_instance(self, command: Command) -> None:
        arn = command["instance_arn"]
        changes = self.adapter.terminate_container_instance(command["cluster_name"], arn)
        self.write_lines(render.render_terminated_instance(arn, changes))

    # Tasks

    def _do_list_tasks(self, command: Command) -> None:
        cluster_name = command["cluster_name"]
        arns = self.adapter.list_tasks(cluster_name)
        records = self.adapter.describe_tasks(cluster_name, arns)
        self.write_lines(render.render_task_list(cluster_name, arns, records))

    def _do_describe_all_tasks(self, command: Command) -> None:
        cluster_name = command["cluster_name"]
        records = self.adapter.describe_all_tasks(cluster_name)
        if not records:
            self.write(f"No tasks for {cluster_name}.")
            return
        self.write_lines(render.render_task_records(records))

    def _do_run_task(self, command: Command) -> None:
        cluster_name = command["cluster_name"]
        result = self.adapter.run_task(cluster_name, command["task_definition"])
        self.write_lines(render.render_run_task_result(result))

        arns = [task.arn for task in result.tasks]
        if not arns:
            return
        tasks = ", ".join(arns)

        def on_running(future: Future) -> None:
            error = future.exception()
            if error is None:
                self.write(f"Task: {tasks} is now running on cluster {cluster_name}.")
            else:
                self.write(
                    f"Problem waiting for task: {tasks} on cluster {cluster_name} "
                    f"to start. Error: {error}."
                )

        self._track(self.adapter.wait_until_tasks_running(cluster_name, arns), on_running)

    def _do_stop_task(self, command: Command) -> None:
        cluster_name = command["cluster_name"]
        task_arn = command["task_arn"]
        self.write(f"Stopping the task: {task_arn}.")
        task = self.adapter.stop_task(cluster_name, task_arn)
        self.write("This task is scheduled to stop.")
        self.write_lines(render.render_task(task))

        def on_stopped(future: Future) -> None:
            error = future.exception()
            if error is None:
                self.write(f"Task: {task_arn} on cluster {cluster_name} is now stopped.")
            else:
                self.write(
                    f"There was a problem waiting for task {task_arn} on cluster "
                    f"{cluster_name} to stop. Error: {error}."
                )

        self._track(
            self.adapter.wait_until_tasks_stopped(cluster_name, [task_arn]), on_stopped
        )

    # Task definitions

    def _do_list_task_definitions(self, command: Command) -> None:
        arns = self.adapter.list_task_definitions()
        self.write_lines(render.render_task_definition_list(arns))

    def _do_describe_task_definition(self, command: Command) -> None:
        task_definition = self.adapter.describe_task_definition(
            command["task_definition_arn"]
        )
        self.write_lines(render.render_task_definition(task_definition))

    def _do_register_task_definition(self, command: Command) -> None:
        task_definition = self.adapter.register_task_definition(command["config_file"])
        self.write("Task definition registered.")
        self.write_lines(render.render_task_definition(task_definition))

    def _do_task_definition_template(self, command: Command) -> None:
        template = task_definition_template(command["kind"])
        self.write_lines(render.render_template(template))
