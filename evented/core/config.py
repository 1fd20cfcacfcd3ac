"""
Container configuration.

Containers take a ContainerConfig instance or a plain dict of overrides that
is merged over the defaults. Configuration can also be loaded from a YAML
file, either at the top level or under an ``evented:`` section.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field


class ContainerConfig(BaseModel):
    """
    Immutable behaviour switches shared by EventList and EventCollection.

    Attributes:
        suppress_subscriber_errors: Log subscriber exceptions and keep
            dispatching instead of propagating them to the mutating caller
        log_mutations: Emit a DEBUG log line for every committed mutation
        dedupe_subscribers: Ignore a subscribe() call for a callback that is
            already registered for the same event

    Examples:
        >>> config = ContainerConfig(log_mutations=True)
        >>> config.suppress_subscriber_errors
        False
    """

    model_config = {"frozen": True, "extra": "forbid"}

    suppress_subscriber_errors: bool = Field(
        default=False,
        description="Log and continue on subscriber exceptions"
    )
    log_mutations: bool = Field(
        default=False,
        description="DEBUG-log every committed mutation"
    )
    dedupe_subscribers: bool = Field(
        default=True,
        description="Register each callback at most once per event"
    )


ConfigLike = Union[ContainerConfig, Dict[str, Any], None]


def resolve_config(config: ConfigLike = None) -> ContainerConfig:
    """
    Normalize a config argument into a ContainerConfig.

    Args:
        config: A ContainerConfig, a dict of overrides, or None for defaults

    Returns:
        ContainerConfig: Validated configuration

    Raises:
        TypeError: If config is neither a ContainerConfig, a dict nor None
        pydantic.ValidationError: If an override has an unknown key or bad type
    """
    if isinstance(config, ContainerConfig):
        return config

    if config is not None and not isinstance(config, dict):
        raise TypeError(
            f"config must be ContainerConfig or dict, got {type(config).__name__}"
        )

    # Merge with defaults
    defaults = ContainerConfig().model_dump()
    return ContainerConfig(**{**defaults, **(config or {})})


def load_config(path: Union[str, Path], section: Optional[str] = "evented") -> ContainerConfig:
    """
    Load a ContainerConfig from a YAML file.

    If the document has a mapping under ``section`` that mapping is used,
    otherwise the whole document is treated as the config. An empty file
    yields the defaults.

    Args:
        path: Path to the YAML file
        section: Top-level key holding the container settings

    Returns:
        ContainerConfig: Validated configuration

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the document is not a mapping

    Examples:
        >>> config = load_config("config.yaml")
        >>> config.dedupe_subscribers
        True
    """
    config_path = Path(path)
    with open(config_path, "r") as f:
        document = yaml.safe_load(f)

    if document is None:
        document = {}

    if not isinstance(document, dict):
        raise ValueError(
            f"{config_path} must contain a mapping, got {type(document).__name__}"
        )

    if section is not None and section in document:
        if document[section] is None:
            document = {}
        elif isinstance(document[section], dict):
            document = document[section]

    logger.debug(f"Loaded container config from {config_path}: {document}")
    return resolve_config(document)
