"""YAML loading and parsing for graph and path files."""

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import GraphModel, PathModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def _load_yaml_string(yaml_string: str) -> dict:
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected YAML mapping at root, got {type(data).__name__}")

    return data


def parse_graph_model(path: str | Path) -> GraphModel:
    """Load and parse a YAML file into a GraphModel.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    return _validate(GraphModel, load_yaml(path))


def parse_graph_model_from_string(yaml_string: str) -> GraphModel:
    """Parse a YAML string into a GraphModel."""
    return _validate(GraphModel, _load_yaml_string(yaml_string))


def parse_path_model(path: str | Path) -> PathModel:
    """Load and parse a YAML file into a PathModel.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    return _validate(PathModel, load_yaml(path))


def parse_path_model_from_string(yaml_string: str) -> PathModel:
    """Parse a YAML string into a PathModel."""
    return _validate(PathModel, _load_yaml_string(yaml_string))


def _validate(model_type: type[ModelT], data: dict) -> ModelT:
    """Validate raw data against a model.

    Args:
        model_type: The pydantic model to validate against.
        data: The raw YAML data.

    Returns:
        The parsed model.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return model_type.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Schema validation failed with {len(errors)} error(s)", errors
        ) from e
