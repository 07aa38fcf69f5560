"""Tests for ID and ARN utility functions."""

from ecs_pilot.utils.ids import (
    chunked,
    extract_task_definition_name,
    resource_name_from_arn,
)


class TestExtractTaskDefinitionName:
    """Tests for extract_task_definition_name function."""

    def test_full_arn(self):
        """Test extraction from a full ARN."""
        arn = "arn:aws:ecs:us-east-1:123456789:task-definition/my-task:5"
        assert extract_task_definition_name(arn) == "my-task:5"

    def test_arn_without_revision(self):
        """Test extraction from ARN without revision."""
        arn = "arn:aws:ecs:us-east-1:123456789:task-definition/my-task"
        assert extract_task_definition_name(arn) == "my-task"

    def test_simple_name(self):
        """Test with just a task definition name (no ARN)."""
        assert extract_task_definition_name("my-task:5") == "my-task:5"

    def test_empty_string(self):
        """Test with empty string."""
        assert extract_task_definition_name("") == ""


class TestResourceNameFromArn:
    """Tests for resource_name_from_arn function."""

    def test_cluster_arn(self):
        """Test extraction of a cluster name."""
        arn = "arn:aws:ecs:us-east-1:123456789:cluster/prod"
        assert resource_name_from_arn(arn) == "prod"

    def test_plain_name(self):
        """Test that a plain name is returned unchanged."""
        assert resource_name_from_arn("prod") == "prod"


class TestChunked:
    """Tests for chunked function."""

    def test_exact_batches(self):
        """Test splitting into full batches."""
        assert chunked(["a", "b", "c", "d"], 2) == [["a", "b"], ["c", "d"]]

    def test_partial_last_batch(self):
        """Test that the last batch holds the remainder."""
        assert chunked(["a", "b", "c"], 2) == [["a", "b"], ["c"]]

    def test_empty_list(self):
        """Test that an empty list yields no batches."""
        assert chunked([], 100) == []
