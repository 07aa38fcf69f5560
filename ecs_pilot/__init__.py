"""ECS Pilot - interactive command-line client for Amazon ECS."""

__version__ = "0.1.0"
