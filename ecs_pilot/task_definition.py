"""Task definition files and templates.

Task definition files mirror the shape of the ``RegisterTaskDefinition``
request (camelCase keys, as boto3 expects them) and are passed through
without further interpretation.
"""

import copy
import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from ecs_pilot.exceptions import TaskDefinitionFileError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".toml")
REQUIRED_KEYS = ("family", "containerDefinitions")

DEFAULT_TEMPLATE: dict[str, Any] = {
    "family": "Family",
    "containerDefinitions": [
        {
            "name": "Task Definition Name",
            "image": "IMAGE REFERENCE",
            # Hard memory limit in MiB; the container is killed above it.
            "memory": 500,
            "command": ["CMD"],
            "entryPoint": ["ENTRYPOINT"],
            # 1024 CPU units per EC2 core.
            "cpu": 0,
            "essential": True,
            "disableNetworking": False,
            "portMappings": [
                {"containerPort": 25565, "hostPort": 25565, "protocol": "tcp"},
            ],
            "readonlyRootFilesystem": False,
            "privileged": False,
        }
    ],
    "volumes": [],
}

COMPLETE_TEMPLATE: dict[str, Any] = {
    "family": "",
    "taskRoleArn": "",
    "containerDefinitions": [
        {
            "name": "",
            "image": "",
            "memory": 0,
            "command": [""],
            "entryPoint": [""],
            "dockerLabels": {"Key": "Value"},
            "cpu": 0,
            "essential": True,
            "workingDirectory": "",
            "environment": [{"name": "", "value": ""}],
            "disableNetworking": False,
            "portMappings": [{"containerPort": 1, "hostPort": 1, "protocol": "tcp"}],
            "hostname": "",
            "dnsServers": [""],
            "dnsSearchDomains": [""],
            "extraHosts": [{"hostname": "", "ipAddress": ""}],
            "readonlyRootFilesystem": False,
            "mountPoints": [{"containerPath": "", "readOnly": False, "sourceVolume": ""}],
            "volumesFrom": [{"readOnly": False, "sourceContainer": ""}],
            "logConfiguration": {"logDriver": "json-file", "options": {"Key": ""}},
            "privileged": False,
            "user": "",
            "dockerSecurityOptions": [""],
            # CORE, CPU, FSIZE, LOCKS, MLOCK, MSGQUEUE, NICE, NOFILE, NPROC, ...
            "ulimits": [{"name": "core", "hardLimit": 1, "softLimit": 1}],
        }
    ],
    "volumes": [{"name": "", "host": {"sourcePath": ""}}],
}

TEMPLATES = {
    "default": DEFAULT_TEMPLATE,
    "complete": COMPLETE_TEMPLATE,
}


def task_definition_template(kind: str = "default") -> dict[str, Any]:
    """Return a fresh copy of a task definition template.

    Args:
        kind: "default" for a working example, "complete" for every field

    Raises:
        TaskDefinitionFileError: If the template kind is unknown
    """
    try:
        return copy.deepcopy(TEMPLATES[kind])
    except KeyError:
        known = ", ".join(TEMPLATES)
        raise TaskDefinitionFileError(
            f"Unknown template '{kind}' (choose from: {known})"
        ) from None


def resolve_task_definition_path(name: str, search_dir: Path | None = None) -> Path:
    """Find the file for a task definition name.

    A name with a suffix is used as given. A bare name is looked up as
    ``<name>.json`` and then ``<name>.toml`` in ``search_dir``.
    """
    path = Path(name)
    if path.suffix:
        return path

    base = search_dir if search_dir is not None else Path(".")
    for suffix in SUPPORTED_SUFFIXES:
        candidate = base / f"{name}{suffix}"
        if candidate.exists():
            return candidate
    raise TaskDefinitionFileError(
        f"No task definition file named {name}.json or {name}.toml in {base}"
    )


def load_task_definition(name: str, search_dir: Path | None = None) -> dict[str, Any]:
    """Read a task definition file into a RegisterTaskDefinition request.

    Args:
        name: File path, or bare name to resolve in ``search_dir``
        search_dir: Directory for bare names (default: current directory)

    Returns:
        Request parameters for RegisterTaskDefinition

    Raises:
        TaskDefinitionFileError: If the file is missing, unreadable or malformed
    """
    path = resolve_task_definition_path(name, search_dir)
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise TaskDefinitionFileError(
            f"Unsupported task definition file type: {path.suffix}"
        )

    logger.debug(f"Reading task definition from {path}")
    try:
        if path.suffix == ".json":
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        else:
            with path.open("rb") as fh:
                data = tomllib.load(fh)
    except FileNotFoundError:
        raise TaskDefinitionFileError(f"Task definition file not found: {path}") from None
    except OSError as e:
        raise TaskDefinitionFileError(f"Couldn't read {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise TaskDefinitionFileError(f"Couldn't parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise TaskDefinitionFileError(f"{path} must contain a table at the top level")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise TaskDefinitionFileError(
            f"{path} is missing required keys: {', '.join(missing)}"
        )

    return data
