"""Task definition models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PortMapping:
    """Container port mapping from a task definition."""

    container_port: int | None = None
    host_port: int | None = None
    protocol: str | None = None


@dataclass
class ContainerDefinition:
    """One container definition inside a task definition."""

    name: str
    image: str | None = None
    cpu: int | None = None
    memory: int | None = None
    essential: bool | None = None
    command: list[str] = field(default_factory=list)
    entry_point: list[str] = field(default_factory=list)
    port_mappings: list[PortMapping] = field(default_factory=list)
    environment: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ContainerDefinition":
        return cls(
            name=data.get("name", ""),
            image=data.get("image"),
            cpu=data.get("cpu"),
            memory=data.get("memory"),
            essential=data.get("essential"),
            command=list(data.get("command", [])),
            entry_point=list(data.get("entryPoint", [])),
            port_mappings=[
                PortMapping(
                    container_port=p.get("containerPort"),
                    host_port=p.get("hostPort"),
                    protocol=p.get("protocol"),
                )
                for p in data.get("portMappings", [])
            ],
            environment={
                e.get("name", ""): e.get("value", "")
                for e in data.get("environment", [])
            },
        )


@dataclass
class TaskDefinition:
    """A registered task definition revision."""

    arn: str
    family: str | None = None
    revision: int | None = None
    status: str | None = None
    cpu: str | None = None
    memory: str | None = None
    network_mode: str | None = None
    containers: list[ContainerDefinition] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TaskDefinition":
        return cls(
            arn=data.get("taskDefinitionArn", ""),
            family=data.get("family"),
            revision=data.get("revision"),
            status=data.get("status"),
            cpu=data.get("cpu"),
            memory=data.get("memory"),
            network_mode=data.get("networkMode"),
            containers=[
                ContainerDefinition.from_api(c)
                for c in data.get("containerDefinitions", [])
            ],
        )
