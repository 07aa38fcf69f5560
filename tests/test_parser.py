"""Tests for the shell command grammar."""

import pytest

from ecs_pilot.shell.parser import (
    COMMANDS,
    CommandParseError,
    help_lines,
    parse_line,
)


class TestParseLine:
    """Tests for parse_line."""

    def test_blank_line(self):
        """Test that blank input parses to nothing."""
        assert parse_line("") is None
        assert parse_line("   \t ") is None

    def test_single_word_command(self):
        """Test a command without group or arguments."""
        command = parse_line("verbose")

        assert command.name == "verbose"
        assert dict(command.args) == {}

    def test_group_command_with_arguments(self):
        """Test a two-level command with positional arguments."""
        command = parse_line("task run prod web:3")

        assert command.name == "task run"
        assert command["cluster_name"] == "prod"
        assert command["task_definition"] == "web:3"

    def test_extra_whitespace(self):
        """Test that tokens are split on any run of whitespace."""
        command = parse_line("  container   describe  prod   arn:ci/1 ")

        assert command.name == "container describe"
        assert command["instance_arn"] == "arn:ci/1"

    def test_hyphenated_names(self):
        """Test hyphenated groups and actions."""
        command = parse_line("task-definition describe arn:td/web:1")

        assert command.name == "task-definition describe"
        assert command["task_definition_arn"] == "arn:td/web:1"
        assert parse_line("container describe-all prod").name == "container describe-all"

    def test_no_values_leak_between_lines(self):
        """Test that each parse produces an independent command."""
        first = parse_line("task stop prod arn:task/1")
        second = parse_line("cluster list")

        assert "task_arn" not in second.args
        assert "cluster_name" not in second.args
        assert first["task_arn"] == "arn:task/1"

    def test_command_is_immutable(self):
        """Test that parsed arguments cannot be changed."""
        command = parse_line("cluster describe prod")

        with pytest.raises(TypeError):
            command.args["cluster_name"] = "other"

    def test_template_kind_defaults(self):
        """Test the optional template kind."""
        assert parse_line("task-definition template")["kind"] == "default"
        assert parse_line("task-definition template complete")["kind"] == "complete"

    def test_template_kind_choices(self):
        """Test that unknown template kinds are rejected."""
        with pytest.raises(CommandParseError):
            parse_line("task-definition template fancy")

    def test_unknown_command(self):
        """Test that an unknown word raises CommandParseError."""
        with pytest.raises(CommandParseError):
            parse_line("frobnicate")

    def test_unknown_action(self):
        """Test that an unknown action raises CommandParseError."""
        with pytest.raises(CommandParseError):
            parse_line("cluster explode prod")

    def test_missing_group_action(self):
        """Test that a bare group name is incomplete."""
        with pytest.raises(CommandParseError):
            parse_line("task")

    def test_missing_argument(self):
        """Test that a missing positional raises CommandParseError."""
        with pytest.raises(CommandParseError):
            parse_line("task run prod")

    def test_extra_argument(self):
        """Test that surplus tokens raise CommandParseError."""
        with pytest.raises(CommandParseError):
            parse_line("cluster list extra")


class TestHelpLines:
    """Tests for help_lines."""

    def test_one_line_per_command(self):
        """Test that every command is listed."""
        lines = help_lines()

        assert len(lines) == len(COMMANDS)
        assert any("task stop <cluster-name> <task-arn>" in line for line in lines)
        assert any("task-definition template [kind]" in line for line in lines)

    def test_every_listed_command_parses(self):
        """Test that the listed commands are accepted by the parser."""
        for spec in COMMANDS:
            tokens = list(spec.path) + [
                arg.choices[0] if arg.choices else "value" for arg in spec.args
            ]
            command = parse_line(" ".join(tokens))
            assert command.name == spec.name
