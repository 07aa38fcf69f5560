"""ECS operations used by the shell.

Each method wraps one intent in as few remote calls as it needs and returns
view models. Remote errors are not caught here; they reach the caller as
boto3 raised them.
"""

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import Future
from typing import Any

from ecs_pilot.aws.client import AWSClients
from ecs_pilot.config import ConfigError, LaunchConfig, WaitConfig
from ecs_pilot.exceptions import ClusterNotFoundError, InstanceIdNotFoundError
from ecs_pilot.models import (
    Cluster,
    ContainerInstanceRecord,
    InstanceStateChange,
    LaunchedInstance,
    RunTaskResult,
    Task,
    TaskDefinition,
    TaskRecord,
    container_instance_records,
    task_records,
)
from ecs_pilot.task_definition import load_task_definition
from ecs_pilot.utils.ids import chunked

logger = logging.getLogger(__name__)

# Public SSM parameter holding the current ECS-optimized Amazon Linux 2 AMI
ECS_OPTIMIZED_AMI_PARAMETER = (
    "/aws/service/ecs/optimized-ami/amazon-linux-2/recommended/image_id"
)

ECS_USER_DATA = """#!/bin/bash
echo ECS_CLUSTER={cluster} >> /etc/ecs/ecs.config
"""


class ECSAdapter:
    """Request/response wrapper around the ECS and EC2 APIs."""

    # Page size requested from every List* call
    PAGE_SIZE = 100

    # Maximum identifiers accepted by DescribeContainerInstances/DescribeTasks
    DESCRIBE_BATCH_SIZE = 100

    def __init__(
        self,
        clients: AWSClients,
        launch_config: LaunchConfig | None = None,
        wait_config: WaitConfig | None = None,
    ):
        """Initialize the adapter.

        Args:
            clients: AWS clients container
            launch_config: Settings for ``launch_container_instance``
            wait_config: Poll settings for the task state waiters
        """
        self.clients = clients
        self.launch_config = launch_config
        self.wait_config = wait_config or WaitConfig()

    def _paginate(self, operation: str, result_key: str, **params: Any) -> list[str]:
        """Collect ``result_key`` from every page of a List* operation."""
        paginator = self.clients.ecs.get_paginator(operation)
        results: list[str] = []
        for page in paginator.paginate(
            PaginationConfig={"PageSize": self.PAGE_SIZE}, **params
        ):
            results.extend(page.get(result_key, []))
        logger.debug(f"{operation} returned {len(results)} items")
        return results

    # Clusters

    def create_cluster(self, cluster_name: str) -> Cluster:
        logger.info(f"Creating cluster {cluster_name}")
        response = self.clients.ecs.create_cluster(clusterName=cluster_name)
        return Cluster.from_api(response["cluster"])

    def delete_cluster(self, cluster_name: str) -> Cluster:
        logger.info(f"Deleting cluster {cluster_name}")
        response = self.clients.ecs.delete_cluster(cluster=cluster_name)
        return Cluster.from_api(response["cluster"])

    def list_clusters(self) -> list[Cluster]:
        """List every cluster in the region.

        Returns:
            Clusters carrying only their ARN
        """
        arns = self._paginate("list_clusters", "clusterArns")
        return [Cluster.from_arn(arn) for arn in arns]

    def describe_cluster(self, cluster_name: str) -> Cluster:
        """Describe a single cluster.

        Raises:
            ClusterNotFoundError: If ECS reports the cluster as a failure
        """
        response = self.clients.ecs.describe_clusters(clusters=[cluster_name])
        clusters = response.get("clusters", [])
        if not clusters:
            failures = response.get("failures", [])
            reason = failures[0].get("reason") if failures else None
            raise ClusterNotFoundError(cluster_name, reason)
        return Cluster.from_api(clusters[0])

    # Container instances

    def list_container_instances(self, cluster_name: str) -> list[str]:
        return self._paginate(
            "list_container_instances", "containerInstanceArns", cluster=cluster_name
        )

    def describe_container_instance(
        self, cluster_name: str, container_instance_arn: str
    ) -> dict[str, ContainerInstanceRecord]:
        return self.describe_container_instances(cluster_name, [container_instance_arn])

    def describe_container_instances(
        self, cluster_name: str, container_instance_arns: Sequence[str]
    ) -> dict[str, ContainerInstanceRecord]:
        """Describe container instances, merging successes and failures.

        No request is made for an empty list, since ECS rejects one.

        Args:
            cluster_name: Cluster the instances belong to
            container_instance_arns: Instances to describe

        Returns:
            Mapping of container instance ARN to record
        """
        records: dict[str, ContainerInstanceRecord] = {}
        for batch in chunked(list(container_instance_arns), self.DESCRIBE_BATCH_SIZE):
            response = self.clients.ecs.describe_container_instances(
                cluster=cluster_name, containerInstances=batch
            )
            records.update(container_instance_records(response))
        return records

    def describe_all_container_instances(
        self, cluster_name: str
    ) -> dict[str, ContainerInstanceRecord]:
        arns = self.list_container_instances(cluster_name)
        return self.describe_container_instances(cluster_name, arns)

    def _recommended_image_id(self) -> str:
        response = self.clients.ssm.get_parameter(Name=ECS_OPTIMIZED_AMI_PARAMETER)
        return response["Parameter"]["Value"]

    def launch_container_instance(self, cluster_name: str) -> list[LaunchedInstance]:
        """Start an EC2 instance that registers itself with a cluster.

        Raises:
            ConfigError: If no launch settings are configured
        """
        if self.launch_config is None:
            raise ConfigError(
                "Launching container instances needs a [launch] section in the configuration"
            )

        launch = self.launch_config
        image_id = launch.image_id or self._recommended_image_id()
        params: dict[str, Any] = {
            "ImageId": image_id,
            "InstanceType": launch.instance_type,
            "MinCount": 1,
            "MaxCount": 1,
            "UserData": ECS_USER_DATA.format(cluster=cluster_name),
            "TagSpecifications": [
                {
                    "ResourceType": "instance",
                    "Tags": [{"Key": "Name", "Value": f"ecs-{cluster_name}"}],
                }
            ],
        }
        if launch.key_name:
            params["KeyName"] = launch.key_name
        if launch.security_group_ids:
            params["SecurityGroupIds"] = launch.security_group_ids
        if launch.subnet_id:
            params["SubnetId"] = launch.subnet_id
        if launch.iam_instance_profile:
            params["IamInstanceProfile"] = {"Name": launch.iam_instance_profile}

        logger.info(f"Launching {launch.instance_type} ({image_id}) for {cluster_name}")
        response = self.clients.ec2.run_instances(**params)
        return [LaunchedInstance.from_api(i) for i in response.get("Instances", [])]

    def terminate_container_instance(
        self, cluster_name: str, container_instance_arn: str
    ) -> list[InstanceStateChange]:
        """Terminate the EC2 instance behind a container instance.

        Raises:
            InstanceIdNotFoundError: If the describe response carries no EC2
                instance ID for the container instance
        """
        response = self.clients.ecs.describe_container_instances(
            cluster=cluster_name, containerInstances=[container_instance_arn]
        )

        instance_id = None
        for instance in response.get("containerInstances", []):
            arn = instance.get("containerInstanceArn", "")
            if arn == container_instance_arn or arn.endswith(f"/{container_instance_arn}"):
                instance_id = instance.get("ec2InstanceId")
        if instance_id is None:
            raise InstanceIdNotFoundError(container_instance_arn)

        logger.info(f"Terminating {instance_id} behind {container_instance_arn}")
        result = self.clients.ec2.terminate_instances(InstanceIds=[instance_id])
        return [
            InstanceStateChange.from_api(change)
            for change in result.get("TerminatingInstances", [])
        ]

    # Tasks

    def list_tasks(self, cluster_name: str) -> list[str]:
        return self._paginate("list_tasks", "taskArns", cluster=cluster_name)

    def describe_tasks(
        self, cluster_name: str, task_arns: Sequence[str]
    ) -> dict[str, TaskRecord]:
        """Describe tasks, merging successes and failures.

        No request is made for an empty list, since ECS rejects one.
        """
        records: dict[str, TaskRecord] = {}
        for batch in chunked(list(task_arns), self.DESCRIBE_BATCH_SIZE):
            response = self.clients.ecs.describe_tasks(cluster=cluster_name, tasks=batch)
            records.update(task_records(response))
        return records

    def describe_all_tasks(self, cluster_name: str) -> dict[str, TaskRecord]:
        return self.describe_tasks(cluster_name, self.list_tasks(cluster_name))

    def run_task(self, cluster_name: str, task_definition: str) -> RunTaskResult:
        logger.info(f"Running {task_definition} on {cluster_name}")
        response = self.clients.ecs.run_task(
            cluster=cluster_name, taskDefinition=task_definition, count=1
        )
        return RunTaskResult.from_api(response)

    def stop_task(self, cluster_name: str, task_arn: str) -> Task:
        logger.info(f"Stopping {task_arn} on {cluster_name}")
        response = self.clients.ecs.stop_task(cluster=cluster_name, task=task_arn)
        return Task.from_api(response["task"])

    def _start_wait(
        self, waiter_name: str, cluster_name: str, task_arns: Sequence[str]
    ) -> Future:
        """Run a task waiter on its own daemon thread.

        The returned future resolves to None once the waiter succeeds, or
        carries the waiter's exception.
        """
        future: Future = Future()
        future.set_running_or_notify_cancel()
        arns = list(task_arns)

        if not arns:
            future.set_result(None)
            return future

        def wait() -> None:
            logger.debug(f"Waiting ({waiter_name}) for {', '.join(arns)}")
            try:
                waiter = self.clients.ecs.get_waiter(waiter_name)
                waiter.wait(
                    cluster=cluster_name,
                    tasks=arns,
                    WaiterConfig={
                        "Delay": self.wait_config.delay,
                        "MaxAttempts": self.wait_config.max_attempts,
                    },
                )
            except Exception as e:
                logger.debug(f"Waiter {waiter_name} failed: {e}")
                future.set_exception(e)
            else:
                future.set_result(None)

        threading.Thread(target=wait, name=f"ecs-{waiter_name}", daemon=True).start()
        return future

    def wait_until_tasks_running(
        self, cluster_name: str, task_arns: Sequence[str]
    ) -> Future:
        return self._start_wait("tasks_running", cluster_name, task_arns)

    def wait_until_tasks_stopped(
        self, cluster_name: str, task_arns: Sequence[str]
    ) -> Future:
        return self._start_wait("tasks_stopped", cluster_name, task_arns)

    # Task definitions

    def list_task_definitions(self) -> list[str]:
        return self._paginate("list_task_definitions", "taskDefinitionArns")

    def describe_task_definition(self, task_definition: str) -> TaskDefinition:
        response = self.clients.ecs.describe_task_definition(
            taskDefinition=task_definition
        )
        return TaskDefinition.from_api(response["taskDefinition"])

    def register_task_definition(self, config_file: str) -> TaskDefinition:
        """Register a task definition read from a JSON or TOML file."""
        request = load_task_definition(config_file)
        logger.info(f"Registering task definition family {request.get('family')}")
        response = self.clients.ecs.register_task_definition(**request)
        return TaskDefinition.from_api(response["taskDefinition"])
