"""
Core code generation components.

Provides the describe model, naming, mapping and base generator classes
used by all language generators.
"""

from .generator import (
    CodeGenerator,
    EmissionError,
    GeneratorError,
    GenerationResult,
    MetadataFetchError,
    SObjectDeclaration,
    generate_code,
)
from .schema import (
    ChildRelationshipDescriptor,
    DescribeFormatError,
    DescribeMetadata,
    FieldDescriptor,
    SchemaType,
    describe_from_dict,
)
from .naming import (
    CrossReferenceIndex,
    build_index,
    clean_api_name,
    contract_name,
    resolve_class_name,
    resolve_field_name,
)
from .mapper import (
    POLYMORPHIC_TYPE_NAME,
    DeclaredType,
    FieldMetadata,
    PropertyDescriptor,
    TypeKind,
    map_object,
)
from .config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    ObjectConfig,
    load_config,
)
from .pipeline import SObjectGenerator
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "MetadataFetchError",
    "EmissionError",
    "GenerationResult",
    "SObjectDeclaration",
    "generate_code",
    # Describe model
    "SchemaType",
    "FieldDescriptor",
    "ChildRelationshipDescriptor",
    "DescribeMetadata",
    "DescribeFormatError",
    "describe_from_dict",
    # Naming
    "CrossReferenceIndex",
    "build_index",
    "clean_api_name",
    "contract_name",
    "resolve_class_name",
    "resolve_field_name",
    # Mapping
    "POLYMORPHIC_TYPE_NAME",
    "TypeKind",
    "DeclaredType",
    "FieldMetadata",
    "PropertyDescriptor",
    "map_object",
    # Configuration system
    "ObjectConfig",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Pipeline
    "SObjectGenerator",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
