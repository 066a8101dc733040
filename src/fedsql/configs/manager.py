import os
import pathlib
import re
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, SecretStr, ValidationError

from fedsql.common.errors import ConfigurationError
from fedsql.common.logger import get_logger
from .datasources import DatasourceConfig, DatasourceFileConfig

logger = get_logger(__name__)

_REFERENCE = re.compile(r"^\$\{(?P<provider>[A-Za-z_]+):(?P<key>[^}]+)\}$")


def resolve_reference(value: str) -> str:
    """Resolves a "${env:NAME}" reference. Other strings are returned unchanged.

    Raises:
        ConfigurationError: If the provider is unknown or the variable is unset.
    """
    match = _REFERENCE.match(value)
    if not match:
        return value

    provider, key = match.group("provider"), match.group("key")
    if provider != "env":
        raise ConfigurationError(f"Unknown secret provider ID: '{provider}' in '{value}'")

    resolved = os.environ.get(key)
    if resolved is None:
        raise ConfigurationError(f"Secret not found: {value}")
    return resolved


def resolve_object(obj: Any) -> Any:
    """Recursively resolves references in models, dicts, lists and SecretStr values."""
    if isinstance(obj, str):
        return resolve_reference(obj)

    if isinstance(obj, SecretStr):
        resolved = resolve_reference(obj.get_secret_value())
        return SecretStr(resolved)

    if isinstance(obj, BaseModel):
        updates = {}
        for field_name in type(obj).model_fields.keys():
            val = getattr(obj, field_name)
            resolved = resolve_object(val)
            if resolved is not val:
                updates[field_name] = resolved
        if updates:
            return obj.model_copy(update=updates)
        return obj

    if isinstance(obj, list):
        return [resolve_object(item) for item in obj]

    if isinstance(obj, dict):
        return {k: resolve_object(v) for k, v in obj.items()}

    return obj


def load_datasources(path: Union[str, pathlib.Path]) -> List[DatasourceConfig]:
    """
    Loads datasource configurations from YAML.

    Args:
        path: Path to a datasources.yaml file.

    Returns:
        List[DatasourceConfig]: Validated configs with references resolved.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigurationError: If the file is not valid YAML, fails validation,
            repeats an id, or references an unset variable.
    """
    target_path = pathlib.Path(path)
    if not target_path.exists():
        raise FileNotFoundError(f"Datasource config not found: {target_path}")

    try:
        raw = yaml.safe_load(target_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML from {target_path}: {e}") from e

    try:
        file_config = DatasourceFileConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Datasource Configuration Invalid: {e}") from e

    seen = set()
    for ds in file_config.datasources:
        if ds.id in seen:
            raise ConfigurationError(f"Duplicate datasource id '{ds.id}' in {target_path}")
        seen.add(ds.id)

    configs = resolve_object(file_config.datasources)
    logger.debug(f"Loaded {len(configs)} datasource(s) from {target_path}")
    return configs


def get_datasource(configs: List[DatasourceConfig], datasource_id: str) -> DatasourceConfig:
    """
    Retrieves a datasource config by ID.

    Raises:
        ConfigurationError: If the ID is not configured.
    """
    by_id: Dict[str, DatasourceConfig] = {ds.id: ds for ds in configs}
    try:
        return by_id[datasource_id]
    except KeyError as exc:
        raise ConfigurationError(
            f"Datasource '{datasource_id}' not found. Configured: {sorted(by_id)}"
        ) from exc
