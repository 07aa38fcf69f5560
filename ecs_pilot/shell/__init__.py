"""Interactive command shell for ECS Pilot."""

from ecs_pilot.shell.parser import Command, CommandParseError, parse_line
from ecs_pilot.shell.shell import Shell, ShellState

__all__ = [
    "Command",
    "CommandParseError",
    "parse_line",
    "Shell",
    "ShellState",
]
