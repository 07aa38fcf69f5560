"""Cluster model."""

from dataclasses import dataclass
from typing import Any

from ecs_pilot.utils.ids import resource_name_from_arn


@dataclass
class Cluster:
    """ECS cluster as returned by the list and describe calls.

    Only ``arn`` is known for clusters coming from ListClusters; the other
    fields are filled in by DescribeClusters, CreateCluster and DeleteCluster.
    """

    arn: str
    name: str | None = None
    status: str | None = None
    registered_container_instances_count: int | None = None
    running_tasks_count: int | None = None
    pending_tasks_count: int | None = None
    active_services_count: int | None = None

    @classmethod
    def from_arn(cls, arn: str) -> "Cluster":
        return cls(arn=arn)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Cluster":
        arn = data.get("clusterArn", "")
        return cls(
            arn=arn,
            name=data.get("clusterName") or resource_name_from_arn(arn) or None,
            status=data.get("status"),
            registered_container_instances_count=data.get(
                "registeredContainerInstancesCount"
            ),
            running_tasks_count=data.get("runningTasksCount"),
            pending_tasks_count=data.get("pendingTasksCount"),
            active_services_count=data.get("activeServicesCount"),
        )
