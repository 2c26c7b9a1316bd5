"""
Naming utilities for safe code generation.

Maps raw SObject and field api names to generated identifiers, and builds
the class-name -> contract-name index every generator run shares.
All functions here are pure: the same inputs always give the same name.
"""

import re
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Set

from .config import ObjectConfig

# Suffixes Salesforce appends to custom objects, fields and relationships
API_NAME_SUFFIXES = (
    "__history",
    "__share",
    "__feed",
    "__mdt",
    "__c",
    "__r",
    "__x",
    "__e",
    "__b",
)

FOREIGN_KEY_SUFFIX = "Id"
CONTRACT_SUFFIX = "Fields"

_SUFFIX_RE = re.compile(
    "(" + "|".join(re.escape(s) for s in API_NAME_SUFFIXES) + ")$", re.IGNORECASE
)


def clean_api_name(api_name: str) -> str:
    """
    Convert a raw api name to a PascalCase identifier.

    ``My_Test_Object__c`` -> ``MyTestObject``; ``My__Test_Object__r`` ->
    ``MyTestObject``. Characters after the first of each segment keep their
    case, so ``AccountId`` stays ``AccountId``.
    """
    stripped = _SUFFIX_RE.sub("", api_name)
    parts = [part for part in stripped.split("_") if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def contract_name(class_name: str) -> str:
    """Name of the read-only contract type paired with ``class_name``."""
    return f"{class_name}{CONTRACT_SUFFIX}"


def resolve_class_name(config: ObjectConfig) -> str:
    """Generated class name for a configured object."""
    if config.use_naming_convention:
        return clean_api_name(config.api_name)
    return config.api_name


def resolve_field_name(config: ObjectConfig, raw_name: str, is_reference: bool) -> str:
    """
    Generated property name for a raw field or relationship name.

    Args:
        config: Naming policy of the object that owns the property
        raw_name: Field api name or relationship name from the describe
        is_reference: True for the scalar foreign key of a lookup field

    Returns:
        Property identifier
    """
    override = config.override_for(raw_name)
    if override:
        return override

    if not config.use_naming_convention:
        return raw_name

    cleaned = clean_api_name(raw_name)
    if not cleaned:
        return raw_name

    name = cleaned[0].lower() + cleaned[1:]
    if is_reference and not raw_name.endswith(FOREIGN_KEY_SUFFIX):
        name += FOREIGN_KEY_SUFFIX
    return name


def escape_reserved(name: str, reserved_words: Set[str], suffix: str = "_") -> str:
    """Append ``suffix`` when ``name`` collides with a reserved word."""
    if name in reserved_words:
        return f"{name}{suffix}"
    return name


class CrossReferenceIndex(Mapping[str, str]):
    """
    Read-only map of generated class name -> contract name.

    Also answers "is this api name part of the run, and what is its
    class?" so mappers never need the raw config list.
    """

    def __init__(self, configs: Iterable[ObjectConfig]):
        contracts: Dict[str, str] = {}
        by_api_name: Dict[str, ObjectConfig] = {}

        for config in configs:
            class_name = resolve_class_name(config)
            contracts[class_name] = contract_name(class_name)
            # first entry wins for duplicate api names
            by_api_name.setdefault(config.api_name.lower(), config)

        self._contracts = MappingProxyType(contracts)
        self._configs = MappingProxyType(by_api_name)

    def __getitem__(self, class_name: str) -> str:
        return self._contracts[class_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._contracts)

    def __len__(self) -> int:
        return len(self._contracts)

    def config_for(self, api_name: str) -> Optional[ObjectConfig]:
        """Configured object for ``api_name`` (case-insensitive)."""
        return self._configs.get(api_name.lower())

    def is_configured(self, api_name: str) -> bool:
        return api_name.lower() in self._configs

    def class_for(self, api_name: str) -> Optional[str]:
        """Generated class name for a configured api name."""
        config = self.config_for(api_name)
        if config is None:
            return None
        return resolve_class_name(config)

    def contract_for(self, type_name: str) -> str:
        """Contract name for a generated class, or ``type_name`` unchanged."""
        return self._contracts.get(type_name, type_name)


def build_index(configs: Iterable[ObjectConfig]) -> CrossReferenceIndex:
    """Build the cross-reference index for every configured object."""
    return CrossReferenceIndex(configs)
