"""
Lightweight settings base class.

Settings classes declare annotated fields; values are resolved from keyword
arguments, environment variables, an optional .env file and finally the
declared default, then coerced to the annotated type.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union, get_type_hints


class FieldInfo:
    """Information about a field in a settings class."""

    def __init__(
        self,
        default: Any = None,
        description: str = "",
        validation_alias: Optional[Union[str, List[str], "AliasChoices"]] = None,
        required: bool = False,
    ) -> None:
        self.default = default
        self.description = description
        self.validation_alias = validation_alias
        self.required = required


def Field(
    default: Any = None,
    *,
    description: str = "",
    validation_alias: Optional[Union[str, List[str], "AliasChoices"]] = None,
) -> Any:
    """Create a field descriptor for settings. ``...`` marks a required field."""
    required = default is ...
    if required:
        default = None

    return FieldInfo(
        default=default,
        description=description,
        validation_alias=validation_alias,
        required=required,
    )


class AliasChoices:
    """Several environment variable names accepted for one field."""

    def __init__(self, *choices: str) -> None:
        self.choices = list(choices)

    def __iter__(self):
        return iter(self.choices)


class SettingsConfigDict:
    """Configuration for settings loading."""

    def __init__(
        self,
        env_file: Optional[str] = None,
        env_file_encoding: str = "utf-8",
        case_sensitive: bool = True,
    ) -> None:
        self.env_file = env_file
        self.env_file_encoding = env_file_encoding
        self.case_sensitive = case_sensitive


class BaseSettings:
    """Base class for settings that loads from environment variables."""

    model_config: SettingsConfigDict = SettingsConfigDict()

    def __init__(self, **kwargs: Any) -> None:
        config = self.model_config
        env_vars: Dict[str, str] = {}
        if config.env_file:
            env_vars = self._load_env_file(config.env_file, config.env_file_encoding)

        for field_name, field_type in get_type_hints(self.__class__).items():
            if field_name.startswith("_") or field_name == "model_config":
                continue

            field_info = getattr(self.__class__, field_name, None)
            if isinstance(field_info, FieldInfo):
                default_value = field_info.default
                env_names = self._env_names(field_name, field_info.validation_alias)
                required = field_info.required
            else:
                default_value = field_info
                env_names = self._env_names(field_name, None)
                required = False

            # Priority: kwargs, environment, .env file, default
            if field_name in kwargs:
                value = kwargs[field_name]
            else:
                value = self._lookup(env_names, env_vars, config.case_sensitive)
                if value is None:
                    if required:
                        raise ValueError(
                            f"Required field '{field_name}' not found in environment"
                        )
                    value = default_value

            setattr(self, field_name, self._convert_value(value, field_type))

    @staticmethod
    def _env_names(
        field_name: str,
        validation_alias: Optional[Union[str, List[str], AliasChoices]],
    ) -> List[str]:
        env_names: List[str] = []
        if isinstance(validation_alias, (AliasChoices, list)):
            env_names.extend(validation_alias)
        elif validation_alias:
            env_names.append(validation_alias)
        env_names.append(field_name.upper())
        return env_names

    @staticmethod
    def _lookup(
        env_names: List[str], env_vars: Dict[str, str], case_sensitive: bool
    ) -> Optional[str]:
        candidates = list(env_names)
        if not case_sensitive:
            candidates.extend(name.lower() for name in env_names)
        for env_name in candidates:
            if env_name in os.environ:
                return os.environ[env_name]
            if env_name in env_vars:
                return env_vars[env_name]
        return None

    @staticmethod
    def _load_env_file(env_file_path: str, encoding: str) -> Dict[str, str]:
        """Load KEY=VALUE pairs from a .env file, if it exists."""
        env_vars: Dict[str, str] = {}
        env_path = Path(env_file_path)

        if env_path.exists():
            with open(env_path, "r", encoding=encoding) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        env_vars[key.strip()] = value.strip().strip("\"'")

        return env_vars

    def _convert_value(self, value: Any, target_type: Type) -> Any:
        """Convert a string value to the target type."""
        if not isinstance(value, str):
            return value

        if target_type is bool:
            return value.lower() in ("true", "1", "yes", "on")
        if target_type is int:
            return int(value)
        if target_type is float:
            return float(value)

        origin = getattr(target_type, "__origin__", None)
        if origin is list:
            if value.startswith("[") and value.endswith("]"):
                return json.loads(value)
            return [item.strip() for item in value.split(",") if item.strip()]

        # Optional[X]: convert to X, treating an empty string as unset
        if origin is Union:
            non_none_types = [
                arg for arg in target_type.__args__ if arg is not type(None)
            ]
            if not value:
                return None
            if non_none_types:
                return self._convert_value(value, non_none_types[0])

        return value
