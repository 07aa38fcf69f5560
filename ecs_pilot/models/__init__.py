"""Data models for ECS Pilot."""

from ecs_pilot.models.failure import Failure
from ecs_pilot.models.cluster import Cluster
from ecs_pilot.models.container_instance import (
    Attribute,
    ContainerInstance,
    ContainerInstanceRecord,
    InstanceStateChange,
    LaunchedInstance,
    Resource,
)
from ecs_pilot.models.task import (
    Container,
    NetworkBinding,
    RunTaskResult,
    Task,
    TaskRecord,
)
from ecs_pilot.models.task_definition import (
    ContainerDefinition,
    PortMapping,
    TaskDefinition,
)
from ecs_pilot.models.records import (
    container_instance_records,
    merge_described,
    task_records,
)

__all__ = [
    "Failure",
    "Cluster",
    "Attribute",
    "ContainerInstance",
    "ContainerInstanceRecord",
    "InstanceStateChange",
    "LaunchedInstance",
    "Resource",
    "Container",
    "NetworkBinding",
    "RunTaskResult",
    "Task",
    "TaskRecord",
    "ContainerDefinition",
    "PortMapping",
    "TaskDefinition",
    "container_instance_records",
    "merge_described",
    "task_records",
]
