"""Merging of describe responses into per-identifier records."""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from ecs_pilot.models.container_instance import (
    ContainerInstance,
    ContainerInstanceRecord,
)
from ecs_pilot.models.failure import Failure
from ecs_pilot.models.task import Task, TaskRecord

R = TypeVar("R", ContainerInstanceRecord, TaskRecord)


def merge_described(
    items: Iterable[Any],
    failures: Iterable[Failure],
    arn_of: Callable[[Any], str],
    make_record: Callable[..., R],
) -> dict[str, R]:
    """Key successful items and failures by identifier.

    Every identifier from either input gets exactly one record. A failure
    whose identifier was also described is attached to that record; any other
    failure becomes a failure-only record. Successes keep response order and
    failure-only records follow them.

    Args:
        items: Successfully described items
        failures: Failures reported by the same call
        arn_of: Returns the identifier of an item
        make_record: Record factory taking ``arn``, item and ``failure``

    Returns:
        Mapping of identifier to record
    """
    records: dict[str, R] = {}
    for item in items:
        arn = arn_of(item)
        records[arn] = make_record(arn, item)
    for failure in failures:
        record = records.get(failure.arn)
        if record is None:
            records[failure.arn] = make_record(failure.arn, None, failure=failure)
        else:
            record.failure = failure
    return records


def container_instance_records(
    response: dict[str, Any],
) -> dict[str, ContainerInstanceRecord]:
    """Build container instance records from a DescribeContainerInstances response."""
    return merge_described(
        [ContainerInstance.from_api(ci) for ci in response.get("containerInstances", [])],
        [Failure.from_api(f) for f in response.get("failures", [])],
        lambda ci: ci.arn,
        lambda arn, ci, failure=None: ContainerInstanceRecord(
            arn=arn, instance=ci, failure=failure
        ),
    )


def task_records(response: dict[str, Any]) -> dict[str, TaskRecord]:
    """Build task records from a DescribeTasks response."""
    return merge_described(
        [Task.from_api(t) for t in response.get("tasks", [])],
        [Failure.from_api(f) for f in response.get("failures", [])],
        lambda task: task.arn,
        lambda arn, task, failure=None: TaskRecord(arn=arn, task=task, failure=failure),
    )
