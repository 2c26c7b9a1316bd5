"""
SObject Code Generation Module

Generates typed declarations in various languages from SObject describe metadata.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core import (
    CodeGenerator,
    EmissionError,
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    MetadataFetchError,
    ObjectConfig,
    SObjectGenerator,
    load_config,
)

__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "MetadataFetchError",
    "EmissionError",
    "GeneratorConfig",
    "ObjectConfig",
    "SObjectGenerator",
    "load_config",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
