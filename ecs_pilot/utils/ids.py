"""Utility functions for handling ECS resource IDs and ARNs."""


def extract_task_definition_name(task_def_arn: str) -> str:
    """Extract task definition name:revision from ARN.

    Args:
        task_def_arn: Full task definition ARN

    Returns:
        Task definition name:revision

    Example:
        >>> extract_task_definition_name("arn:aws:ecs:us-east-1:123:task-definition/my-task:5")
        'my-task:5'
    """
    if "/" in task_def_arn:
        return task_def_arn.split("/")[-1]
    return task_def_arn


def resource_name_from_arn(arn: str) -> str:
    """Return the trailing name of a resource ARN.

    Example:
        >>> resource_name_from_arn("arn:aws:ecs:us-east-1:123:cluster/prod")
        'prod'
    """
    return arn.rsplit("/", 1)[-1]


def chunked(items: list[str], size: int) -> list[list[str]]:
    """Split a list into consecutive batches of at most ``size`` items."""
    return [items[i : i + size] for i in range(0, len(items), size)]
