"""
Configuration management for code generation.

Handles loading generator configuration from JSON files and the
environment, providing defaults and validation for generator settings.
"""

import json
import os
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional, Union
from dataclasses import dataclass, field


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass(frozen=True)
class ObjectConfig:
    """One SObject to generate, with its naming policy."""

    api_name: str
    use_naming_convention: bool = True
    # raw field api name -> generated property name
    field_overrides: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "field_overrides", MappingProxyType(dict(self.field_overrides))
        )

    def override_for(self, raw_name: str) -> Optional[str]:
        """Return the explicit property name for ``raw_name``, if any."""
        lowered = raw_name.lower()
        for api_name, prop_name in self.field_overrides.items():
            if api_name.lower() == lowered:
                return prop_name
        return None

    def __hash__(self):
        return hash((self.api_name, self.use_naming_convention))


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    language: str = "typescript"
    out_path: Optional[str] = None

    # Objects to generate
    sobjects: List[ObjectConfig] = field(default_factory=list)

    # Describe source
    instance_url: Optional[str] = None
    access_token: Optional[str] = None
    api_version: str = "45.0"
    describe_dir: Optional[str] = None

    # Code style settings
    add_comments: bool = True
    runtime_module: Optional[str] = None

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


def object_config_from_entry(entry: Union[str, Dict[str, Any]]) -> ObjectConfig:
    """
    Build an ObjectConfig from one ``sObjects`` entry.

    Entries are either a bare api name or an object with ``apiName``,
    ``autoConvertNames`` and ``fieldMappings``.
    """
    if isinstance(entry, str):
        return ObjectConfig(api_name=entry)

    if not isinstance(entry, dict) or "apiName" not in entry:
        raise ConfigError(f"Invalid sObjects entry: {entry!r}")

    overrides = {}
    for mapping in entry.get("fieldMappings") or []:
        try:
            overrides[mapping["apiName"]] = mapping["propName"]
        except (KeyError, TypeError):
            raise ConfigError(
                f"Invalid field mapping for {entry['apiName']}: {mapping!r}"
            ) from None

    return ObjectConfig(
        api_name=entry["apiName"],
        use_naming_convention=bool(entry.get("autoConvertNames", True)),
        field_overrides=overrides,
    )


class ConfigManager:
    """Manages configuration loading and merging."""

    # json key -> GeneratorConfig attribute
    _KEY_MAP = {
        "language": "language",
        "outPath": "out_path",
        "out_path": "out_path",
        "describeDir": "describe_dir",
        "describe_dir": "describe_dir",
        "addComments": "add_comments",
        "add_comments": "add_comments",
        "runtimeModule": "runtime_module",
        "runtime_module": "runtime_module",
    }

    _AUTH_KEY_MAP = {
        "instanceUrl": "instance_url",
        "instance_url": "instance_url",
        "accessToken": "access_token",
        "access_token": "access_token",
        "apiVersion": "api_version",
        "api_version": "api_version",
    }

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """Initialize configuration manager."""
        self._environ = os.environ if environ is None else environ

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Overrides applied after the file (same keys as the file)
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        merged: Dict[str, Any] = {}

        if config_file:
            merged.update(self._load_config_file(config_file))

        if custom_config:
            merged.update(custom_config)

        config = self._dict_to_config(merged)
        self._apply_environment(config)

        return config

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        config = GeneratorConfig()

        for key, value in config_dict.items():
            if key in self._KEY_MAP:
                setattr(config, self._KEY_MAP[key], value)
            elif key in ("sObjects", "sobjects"):
                if not isinstance(value, list):
                    raise ConfigError("'sObjects' must be a list")
                config.sobjects = [
                    entry if isinstance(entry, ObjectConfig)
                    else object_config_from_entry(entry)
                    for entry in value
                ]
            elif key == "auth":
                if not isinstance(value, dict):
                    raise ConfigError("'auth' must be an object")
                for auth_key, auth_value in value.items():
                    if auth_key in self._AUTH_KEY_MAP:
                        setattr(config, self._AUTH_KEY_MAP[auth_key], auth_value)
            elif key in self._AUTH_KEY_MAP:
                setattr(config, self._AUTH_KEY_MAP[key], value)
            else:
                config.custom[key] = value

        return config

    def _apply_environment(self, config: GeneratorConfig):
        """Fill missing credentials from the environment."""
        if not config.instance_url:
            config.instance_url = self._environ.get("SFDC_INSTANCE_URL")
        if not config.access_token:
            config.access_token = self._environ.get("SFDC_ACCESS_TOKEN")

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.language.lower() not in {"typescript", "ts", "python", "py"}:
            warnings.append(f"Unknown language: {config.language}")

        if not config.sobjects:
            warnings.append("No sObjects configured - nothing will be generated")

        seen = set()
        for sob in config.sobjects:
            key = sob.api_name.lower()
            if key in seen:
                warnings.append(f"Duplicate sObject in configuration: {sob.api_name}")
            seen.add(key)

        if not config.describe_dir and not (config.instance_url and config.access_token):
            warnings.append(
                "No describe source: set auth.instanceUrl/accessToken or describeDir"
            )

        return warnings


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)


# Example configuration file for reference
EXAMPLE_CONFIG = {
    "language": "typescript",
    "outPath": "./src/generated/sobs.ts",
    "auth": {
        "instanceUrl": "https://example.my.salesforce.com",
        "accessToken": "<token>",
        "apiVersion": "45.0",
    },
    "sObjects": [
        "Account",
        {
            "apiName": "Contact",
            "autoConvertNames": True,
            "fieldMappings": [{"apiName": "Name", "propName": "fullName"}],
        },
    ],
}
