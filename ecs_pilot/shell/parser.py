"""Command grammar for the interactive shell.

Every input line is parsed into a new, immutable ``Command``. The argparse
parser is built once, but argparse returns a fresh namespace per call, so no
argument value can leak from one line into the next.
"""

import argparse
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


class CommandParseError(Exception):
    """Raised when a line does not match the command grammar."""


@dataclass(frozen=True)
class ArgSpec:
    """A positional argument of a shell command."""

    name: str
    help: str
    choices: tuple[str, ...] | None = None
    default: str | None = None

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")

    @property
    def optional(self) -> bool:
        return self.default is not None


@dataclass(frozen=True)
class CommandSpec:
    """One command of the grammar, e.g. ``("task", "stop")``."""

    path: tuple[str, ...]
    help: str
    args: tuple[ArgSpec, ...] = ()

    @property
    def name(self) -> str:
        return " ".join(self.path)

    @property
    def usage(self) -> str:
        parts = [self.name]
        for arg in self.args:
            parts.append(f"[{arg.name}]" if arg.optional else f"<{arg.name}>")
        return " ".join(parts)


@dataclass(frozen=True)
class Command:
    """A parsed input line."""

    name: str
    args: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __getitem__(self, key: str) -> str:
        return self.args[key]


CLUSTER_NAME = ArgSpec("cluster-name", "Short name of the cluster.")

GROUP_HELP = {
    "cluster": "the context for cluster commands.",
    "container": "the context for container instance commands.",
    "task": "the context for task commands.",
    "task-definition": "the context for task definitions.",
}

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(("verbose",), "toggle verbose mode."),
    CommandSpec(("help",), "show this list of commands."),
    CommandSpec(("exit",), "exit the program. <ctrl-D> works too."),
    CommandSpec(("quit",), "exit the program."),
    CommandSpec(("cluster", "list"), "list the clusters."),
    CommandSpec(
        ("cluster", "describe"), "show the details of a cluster.", (CLUSTER_NAME,)
    ),
    CommandSpec(("cluster", "create"), "create a new cluster.", (CLUSTER_NAME,)),
    CommandSpec(("cluster", "delete"), "delete an empty cluster.", (CLUSTER_NAME,)),
    CommandSpec(
        ("container", "list"),
        "list container instances attached to a cluster.",
        (CLUSTER_NAME,),
    ),
    CommandSpec(
        ("container", "describe"),
        "details of one container instance.",
        (CLUSTER_NAME, ArgSpec("instance-arn", "ARN of the container instance.")),
    ),
    CommandSpec(
        ("container", "describe-all"),
        "details of every container instance in a cluster.",
        (CLUSTER_NAME,),
    ),
    CommandSpec(
        ("container", "new"),
        "start up a new container instance for a cluster.",
        (CLUSTER_NAME,),
    ),
    CommandSpec(
        ("container", "stop"),
        "terminate a container instance.",
        (
            CLUSTER_NAME,
            ArgSpec("instance-arn", "ARN of the container instance to terminate."),
        ),
    ),
    CommandSpec(("task", "list"), "list the tasks of a cluster.", (CLUSTER_NAME,)),
    CommandSpec(
        ("task", "describe-all"),
        "describe all the tasks of a cluster.",
        (CLUSTER_NAME,),
    ),
    CommandSpec(
        ("task", "run"),
        "run a new task.",
        (CLUSTER_NAME, ArgSpec("task-definition", "Task definition to run.")),
    ),
    CommandSpec(
        ("task", "stop"),
        "stop a task.",
        (CLUSTER_NAME, ArgSpec("task-arn", "ARN of the task to stop (from task list).")),
    ),
    CommandSpec(("task-definition", "list"), "list the registered task definitions."),
    CommandSpec(
        ("task-definition", "describe"),
        "describe a task definition.",
        (ArgSpec("task-definition-arn", "ARN of the task definition."),),
    ),
    CommandSpec(
        ("task-definition", "register"),
        "register a task definition from a JSON or TOML file.",
        (ArgSpec("config-file", "Path or bare name of the file."),),
    ),
    CommandSpec(
        ("task-definition", "template"),
        "print an example task definition file.",
        (
            ArgSpec(
                "kind",
                "Template to print.",
                choices=("default", "complete"),
                default="default",
            ),
        ),
    ),
)


class _ShellArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting the process."""

    def error(self, message: str):
        raise CommandParseError(message)

    def exit(self, status: int = 0, message: str | None = None):
        raise CommandParseError((message or "").strip() or "invalid command")


def _add_arguments(parser: argparse.ArgumentParser, spec: CommandSpec) -> None:
    for arg in spec.args:
        kwargs: dict = {"metavar": arg.name, "help": arg.help}
        if arg.optional:
            kwargs["nargs"] = "?"
            kwargs["default"] = arg.default
        if arg.choices:
            kwargs["choices"] = arg.choices
        parser.add_argument(arg.dest, **kwargs)


def build_parser(commands: tuple[CommandSpec, ...] = COMMANDS) -> argparse.ArgumentParser:
    """Build the argparse parser for the shell grammar."""
    parser = _ShellArgumentParser(prog="", add_help=False, allow_abbrev=False)
    top = parser.add_subparsers(
        dest="command", metavar="command", parser_class=_ShellArgumentParser
    )
    top.required = True

    groups: dict[str, argparse._SubParsersAction] = {}
    for spec in commands:
        if len(spec.path) == 1:
            sub = top.add_parser(spec.path[0], help=spec.help, add_help=False)
        else:
            group, action = spec.path
            if group not in groups:
                group_parser = top.add_parser(
                    group, help=GROUP_HELP.get(group), add_help=False
                )
                actions = group_parser.add_subparsers(dest="action", metavar="action")
                actions.required = True
                groups[group] = actions
            sub = groups[group].add_parser(action, help=spec.help, add_help=False)
        _add_arguments(sub, spec)
    return parser


_PARSER = build_parser()


def parse_line(line: str) -> Command | None:
    """Parse one input line.

    Args:
        line: Raw line as typed by the user

    Returns:
        The parsed command, or None for a blank line

    Raises:
        CommandParseError: If the line does not match the grammar
    """
    tokens = line.split()
    if not tokens:
        return None

    values = vars(_PARSER.parse_args(tokens))
    path = [values.pop("command")]
    action = values.pop("action", None)
    if action:
        path.append(action)
    return Command(name=" ".join(path), args=MappingProxyType(values))


def help_lines(commands: tuple[CommandSpec, ...] = COMMANDS) -> list[str]:
    """Describe every command, one per line."""
    width = max(len(spec.usage) for spec in commands)
    return [f"  {spec.usage.ljust(width)}  {spec.help}" for spec in commands]
