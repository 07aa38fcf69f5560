"""AWS client initialization and configuration."""

import boto3
from botocore.config import Config as BotoConfig

from ecs_pilot.config import AWSConfig


def _create_session(aws_config: AWSConfig) -> boto3.Session:
    session_kwargs = {}
    if aws_config.profile:
        session_kwargs["profile_name"] = aws_config.profile
    return boto3.Session(**session_kwargs)


def create_client(service_name: str, aws_config: AWSConfig, session=None):
    """Create a configured boto3 client.

    Args:
        service_name: boto3 service name, e.g. "ecs" or "ec2"
        aws_config: AWS configuration with region and optional profile
        session: Existing boto3 session to reuse

    Returns:
        Configured boto3 client
    """
    boto_config = BotoConfig(
        retries={
            "max_attempts": 10,
            "mode": "adaptive",
        },
        max_pool_connections=10,
    )

    if session is None:
        session = _create_session(aws_config)

    return session.client(
        service_name,
        region_name=aws_config.region,
        config=boto_config,
    )


class AWSClients:
    """Container for AWS clients."""

    def __init__(self, aws_config: AWSConfig):
        """Initialize AWS clients.

        Args:
            aws_config: AWS configuration
        """
        session = _create_session(aws_config)
        self.ecs = create_client("ecs", aws_config, session)
        self.ec2 = create_client("ec2", aws_config, session)
        self.ssm = create_client("ssm", aws_config, session)
        self.region = aws_config.region
