"""Task models."""

from dataclasses import dataclass, field
from typing import Any

from ecs_pilot.models.failure import Failure


@dataclass
class NetworkBinding:
    """Port binding between a container and its host."""

    bind_ip: str | None = None
    container_port: int | None = None
    host_port: int | None = None
    protocol: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "NetworkBinding":
        return cls(
            bind_ip=data.get("bindIP"),
            container_port=data.get("containerPort"),
            host_port=data.get("hostPort"),
            protocol=data.get("protocol"),
        )


@dataclass
class Container:
    """A container running as part of a task."""

    name: str
    arn: str | None = None
    task_arn: str | None = None
    reason: str | None = None
    last_status: str | None = None
    exit_code: int | None = None
    network_bindings: list[NetworkBinding] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Container":
        return cls(
            name=data.get("name", ""),
            arn=data.get("containerArn"),
            task_arn=data.get("taskArn"),
            reason=data.get("reason"),
            last_status=data.get("lastStatus"),
            exit_code=data.get("exitCode"),
            network_bindings=[
                NetworkBinding.from_api(b) for b in data.get("networkBindings", [])
            ],
        )


@dataclass
class Task:
    """An ECS task."""

    arn: str
    cluster_arn: str | None = None
    container_instance_arn: str | None = None
    task_definition_arn: str | None = None
    last_status: str | None = None
    desired_status: str | None = None
    containers: list[Container] = field(default_factory=list)

    @property
    def container_names(self) -> list[str]:
        return [c.name for c in self.containers]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Task":
        return cls(
            arn=data.get("taskArn", ""),
            cluster_arn=data.get("clusterArn"),
            container_instance_arn=data.get("containerInstanceArn"),
            task_definition_arn=data.get("taskDefinitionArn"),
            last_status=data.get("lastStatus"),
            desired_status=data.get("desiredStatus"),
            containers=[Container.from_api(c) for c in data.get("containers", [])],
        )


@dataclass
class TaskRecord:
    """Outcome of describing one task.

    At least one of ``task`` and ``failure`` is set.
    """

    arn: str
    task: Task | None = None
    failure: Failure | None = None


@dataclass
class RunTaskResult:
    """Tasks started by RunTask and the placements that failed."""

    tasks: list[Task] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RunTaskResult":
        return cls(
            tasks=[Task.from_api(t) for t in data.get("tasks", [])],
            failures=[Failure.from_api(f) for f in data.get("failures", [])],
        )
