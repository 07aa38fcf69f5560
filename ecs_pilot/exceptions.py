"""Errors raised locally by ECS Pilot.

Remote failures are never wrapped: boto3's ``ClientError`` and friends reach
the shell as they were raised.
"""


class ECSPilotError(Exception):
    """Base class for errors detected on the client side."""


class InstanceIdNotFoundError(ECSPilotError):
    """The EC2 instance backing a container instance could not be resolved."""

    def __init__(self, container_instance_arn: str):
        self.container_instance_arn = container_instance_arn
        super().__init__(
            "Can't find the EC2 instance ID for container instance "
            f"{container_instance_arn}"
        )


class ClusterNotFoundError(ECSPilotError):
    """DescribeClusters answered with a failure instead of a cluster."""

    def __init__(self, cluster_name: str, reason: str | None = None):
        self.cluster_name = cluster_name
        self.reason = reason
        message = f"Cluster {cluster_name} not found"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class TaskDefinitionFileError(ECSPilotError):
    """A task definition file could not be read or has the wrong shape."""
