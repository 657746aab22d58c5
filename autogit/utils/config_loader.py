"""Configuration loading utilities."""

from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from autogit.utils.logging import get_logger

if TYPE_CHECKING:
    from autogit.models.config import WorkflowConfig

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = ".autogit.yaml"

T = TypeVar("T", bound=BaseModel)


def load_yaml_config(file_path: Path | str, model_class: type[T]) -> T:
    """
    Load and validate YAML configuration file.

    Args:
        file_path: Path to YAML configuration file
        model_class: Pydantic model class to validate against

    Returns:
        Validated configuration instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
        yaml.YAMLError: If YAML is malformed

    Examples:
        >>> from autogit.models.config import WorkflowConfig
        >>> config = load_yaml_config("config/autogit.yaml", WorkflowConfig)
    """
    path = Path(file_path)

    if not path.exists():
        logger.error(f"Configuration file not found: {path}")
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)

        # An empty file means "all defaults"
        config = model_class.model_validate(raw_config or {})
        logger.info(f"Configuration loaded from {path} ({model_class.__name__})")
        return config

    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML syntax in {path}: {e}")
        raise

    except ValidationError as e:
        logger.error(f"Configuration validation failed for {path}: {e}")
        raise


def load_workflow_config(file_path: Path | str | None = None) -> "WorkflowConfig":
    """
    Load workflow configuration, falling back to defaults.

    An explicitly given path must exist. Without one, `.autogit.yaml` in the
    working directory is used when present.

    Args:
        file_path: Path to the YAML file, or None for the default location

    Returns:
        WorkflowConfig instance
    """
    from autogit.models.config import WorkflowConfig

    if file_path is not None:
        return load_yaml_config(file_path, WorkflowConfig)

    default_path = Path(DEFAULT_CONFIG_FILE)
    if default_path.exists():
        return load_yaml_config(default_path, WorkflowConfig)

    logger.debug(f"No {DEFAULT_CONFIG_FILE} found, using default configuration")
    return WorkflowConfig()
