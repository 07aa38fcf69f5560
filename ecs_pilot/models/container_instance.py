"""Container instance models."""

from dataclasses import dataclass, field
from typing import Any

from ecs_pilot.models.failure import Failure


@dataclass
class Resource:
    """A registered or remaining resource on a container instance."""

    name: str
    type: str | None = None
    value: int | float | str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Resource":
        resource_type = data.get("type")
        if resource_type == "INTEGER":
            value = data.get("integerValue")
        elif resource_type == "DOUBLE":
            value = data.get("doubleValue")
        elif resource_type == "LONG":
            value = data.get("longValue")
        elif resource_type == "STRINGSET":
            value = ", ".join(data.get("stringSetValue", []))
        else:
            value = None
        return cls(name=data.get("name", ""), type=resource_type, value=value)


@dataclass
class Attribute:
    """A container instance attribute."""

    name: str
    value: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Attribute":
        return cls(name=data.get("name", ""), value=data.get("value"))


@dataclass
class ContainerInstance:
    """An EC2 host registered with a cluster."""

    arn: str
    ec2_instance_id: str | None = None
    status: str | None = None
    running_tasks_count: int | None = None
    pending_tasks_count: int | None = None
    registered_resources: list[Resource] = field(default_factory=list)
    remaining_resources: list[Resource] = field(default_factory=list)
    agent_connected: bool | None = None
    agent_update_status: str | None = None
    attributes: list[Attribute] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ContainerInstance":
        return cls(
            arn=data.get("containerInstanceArn", ""),
            ec2_instance_id=data.get("ec2InstanceId"),
            status=data.get("status"),
            running_tasks_count=data.get("runningTasksCount"),
            pending_tasks_count=data.get("pendingTasksCount"),
            registered_resources=[
                Resource.from_api(r) for r in data.get("registeredResources", [])
            ],
            remaining_resources=[
                Resource.from_api(r) for r in data.get("remainingResources", [])
            ],
            agent_connected=data.get("agentConnected"),
            agent_update_status=data.get("agentUpdateStatus"),
            attributes=[Attribute.from_api(a) for a in data.get("attributes", [])],
        )


@dataclass
class ContainerInstanceRecord:
    """Outcome of describing one container instance.

    At least one of ``instance`` and ``failure`` is set.
    """

    arn: str
    instance: ContainerInstance | None = None
    failure: Failure | None = None


@dataclass
class InstanceStateChange:
    """EC2 state transition reported by TerminateInstances."""

    instance_id: str
    previous_state: str | None = None
    current_state: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "InstanceStateChange":
        return cls(
            instance_id=data.get("InstanceId", ""),
            previous_state=data.get("PreviousState", {}).get("Name"),
            current_state=data.get("CurrentState", {}).get("Name"),
        )


@dataclass
class LaunchedInstance:
    """An EC2 instance started to join a cluster."""

    instance_id: str
    instance_type: str | None = None
    image_id: str | None = None
    state: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "LaunchedInstance":
        return cls(
            instance_id=data.get("InstanceId", ""),
            instance_type=data.get("InstanceType"),
            image_id=data.get("ImageId"),
            state=data.get("State", {}).get("Name"),
        )
