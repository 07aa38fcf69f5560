"""Configuration loading for ECS Pilot."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

MIN_WAIT_DELAY = 1
MIN_WAIT_ATTEMPTS = 1


class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


@dataclass
class AWSConfig:
    """AWS connection settings."""

    region: str
    profile: str | None = None


@dataclass
class LaunchConfig:
    """Settings used when launching a new container instance."""

    instance_type: str = "t3.micro"
    image_id: str | None = None
    key_name: str | None = None
    security_group_ids: list[str] = field(default_factory=list)
    subnet_id: str | None = None
    iam_instance_profile: str | None = None


@dataclass
class WaitConfig:
    """Polling settings for task state waiters."""

    delay: int = 6
    max_attempts: int = 100


@dataclass
class ShellConfig:
    """Interactive shell settings."""

    prompt: str = "> "
    history_file: Path | None = None


@dataclass
class Config:
    """Top-level application configuration."""

    aws: AWSConfig
    launch: LaunchConfig | None = None
    wait: WaitConfig = field(default_factory=WaitConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)


def get_default_config_path() -> Path:
    """Return the configuration file path to use when none is given.

    A ``config.toml`` in the current directory wins over the per-user file.
    """
    local = Path("./config.toml")
    if local.exists():
        return local
    return Path.home() / ".config" / "ecs-pilot" / "config.toml"


def _require_section(data: dict[str, Any], name: str) -> dict[str, Any] | None:
    section = data.get(name)
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _typed(
    section: dict[str, Any], section_name: str, key: str, kind: type, default=None
):
    """Read an optional value and check its TOML type."""
    value = section.get(key, default)
    if value is None:
        return None
    # bool is a subclass of int
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(
            f"[{section_name}] {key} must be of type {kind.__name__}, got {value!r}"
        )
    return value


def _parse_aws(data: dict[str, Any]) -> AWSConfig:
    section = _require_section(data, "aws")
    if section is None:
        raise ConfigError("Configuration must contain an [aws] section")
    region = _typed(section, "aws", "region", str)
    if not region:
        raise ConfigError("[aws] section must define a region")
    return AWSConfig(region=region, profile=_typed(section, "aws", "profile", str))


def _parse_launch(data: dict[str, Any]) -> LaunchConfig | None:
    section = _require_section(data, "launch")
    if section is None:
        return None

    security_groups = section.get("security_group_ids", [])
    if isinstance(security_groups, str):
        security_groups = [security_groups]
    if not isinstance(security_groups, list) or not all(
        isinstance(group, str) for group in security_groups
    ):
        raise ConfigError("[launch] security_group_ids must be a list of strings")

    return LaunchConfig(
        instance_type=_typed(section, "launch", "instance_type", str, "t3.micro"),
        image_id=_typed(section, "launch", "image_id", str),
        key_name=_typed(section, "launch", "key_name", str),
        security_group_ids=list(security_groups),
        subnet_id=_typed(section, "launch", "subnet_id", str),
        iam_instance_profile=_typed(section, "launch", "iam_instance_profile", str),
    )


def _parse_wait(data: dict[str, Any]) -> WaitConfig:
    section = _require_section(data, "wait") or {}
    wait = WaitConfig(
        delay=_typed(section, "wait", "delay", int, 6),
        max_attempts=_typed(section, "wait", "max_attempts", int, 100),
    )
    if wait.delay < MIN_WAIT_DELAY:
        raise ConfigError(f"Wait delay must be at least {MIN_WAIT_DELAY} second")
    if wait.max_attempts < MIN_WAIT_ATTEMPTS:
        raise ConfigError(f"Wait max_attempts must be at least {MIN_WAIT_ATTEMPTS}")
    return wait


def _parse_shell(data: dict[str, Any]) -> ShellConfig:
    section = _require_section(data, "shell") or {}
    history_file = _typed(section, "shell", "history_file", str)
    return ShellConfig(
        prompt=_typed(section, "shell", "prompt", str, "> "),
        history_file=Path(history_file).expanduser() if history_file else None,
    )


def load_config(path: Path) -> Config:
    """Load and validate a TOML configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is missing, unreadable, unparsable or invalid
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

    return Config(
        aws=_parse_aws(data),
        launch=_parse_launch(data),
        wait=_parse_wait(data),
        shell=_parse_shell(data),
    )
