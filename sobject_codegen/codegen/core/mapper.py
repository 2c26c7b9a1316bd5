"""
Field and relationship mapping.

Turns one object's describe metadata into the ordered property list a
generator emits: child relationships first, then fields, with a
relationship property in front of each lookup whose target is generated
in the same run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ...logging_config import get_logger
from .config import ObjectConfig
from .naming import CrossReferenceIndex, resolve_field_name
from .schema import (
    ChildRelationshipDescriptor,
    DescribeMetadata,
    FieldDescriptor,
    SchemaType,
)

logger = get_logger(__name__)

# Declared type of a lookup that may point at several objects
POLYMORPHIC_TYPE_NAME = "Name"


class TypeKind(Enum):
    """Language-neutral kinds of declared property types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    LOCATION = "location"
    REFERENCE = "reference"


# schema type -> declared kind; anything missing is a string
SCHEMA_TYPE_KINDS = {
    SchemaType.DATE: TypeKind.DATE,
    SchemaType.DATETIME: TypeKind.DATE,
    SchemaType.BOOLEAN: TypeKind.BOOLEAN,
    SchemaType.DOUBLE: TypeKind.NUMBER,
    SchemaType.INTEGER: TypeKind.NUMBER,
    SchemaType.INT: TypeKind.NUMBER,
    SchemaType.CURRENCY: TypeKind.NUMBER,
    SchemaType.PERCENT: TypeKind.NUMBER,
    SchemaType.LOCATION: TypeKind.LOCATION,
}


@dataclass(frozen=True)
class DeclaredType:
    """Type of a generated property."""

    kind: TypeKind
    reference: Optional[str] = None  # class name, for REFERENCE
    is_array: bool = False

    @classmethod
    def for_schema_type(cls, schema_type: SchemaType) -> "DeclaredType":
        return cls(SCHEMA_TYPE_KINDS.get(schema_type, TypeKind.STRING))

    @classmethod
    def reference_to(cls, class_name: str, is_array: bool = False) -> "DeclaredType":
        return cls(TypeKind.REFERENCE, reference=class_name, is_array=is_array)


@dataclass(frozen=True)
class FieldMetadata:
    """Runtime-visible metadata attached to one generated property."""

    api_name: str
    createable: bool
    updateable: bool
    required: bool
    external_id: bool
    is_child_relationship: bool
    salesforce_type: SchemaType
    label: str
    # Generated class the property points at; emitters render it as a thunk
    reference: Optional[str] = None

    @classmethod
    def for_field(cls, field: FieldDescriptor) -> "FieldMetadata":
        """Metadata for the scalar property of a describe field."""
        return cls(
            api_name=field.raw_name,
            createable=field.createable,
            updateable=field.updateable,
            required=(field.createable or field.updateable) and not field.nillable,
            external_id=field.external_id,
            is_child_relationship=False,
            salesforce_type=field.schema_type,
            label=field.label,
        )

    @classmethod
    def for_relationship(
        cls,
        api_name: str,
        label: str,
        reference: str,
        is_child_relationship: bool = False,
    ) -> "FieldMetadata":
        """Metadata for a read-only relationship property."""
        return cls(
            api_name=api_name,
            createable=False,
            updateable=False,
            required=False,
            external_id=False,
            is_child_relationship=is_child_relationship,
            salesforce_type=SchemaType.REFERENCE,
            label=label,
            reference=reference,
        )


@dataclass(frozen=True)
class PropertyDescriptor:
    """One property of a generated class and its contract."""

    target_name: str
    declared_type: DeclaredType
    metadata: FieldMetadata
    doc_text: Optional[str] = None


def map_object(
    config: ObjectConfig, describe: DescribeMetadata, index: CrossReferenceIndex
) -> List[PropertyDescriptor]:
    """
    Map an object's describe to its ordered property descriptors.

    Args:
        config: Configuration of the object being generated
        describe: Its describe metadata
        index: Cross-reference index for the whole run

    Returns:
        Child relationship properties followed by field properties
    """
    properties = map_child_relationships(config, describe.child_relationships, index)
    properties.extend(map_fields(config, describe.fields, index))
    return properties


def map_child_relationships(
    config: ObjectConfig,
    children: tuple[ChildRelationshipDescriptor, ...],
    index: CrossReferenceIndex,
) -> List[PropertyDescriptor]:
    """Array-typed properties for child relationships to generated objects."""
    properties = []

    for child in children:
        child_class = index.class_for(child.child_object_api_name)

        if child_class is None:
            logger.debug(
                "%s: skipping child %s (not generated)",
                config.api_name,
                child.child_object_api_name,
            )
            continue
        if child.child_object_api_name.lower() == config.api_name.lower():
            continue
        if child.deprecated_and_hidden or not child.relationship_name:
            continue

        properties.append(
            PropertyDescriptor(
                target_name=resolve_field_name(config, child.relationship_name, False),
                declared_type=DeclaredType.reference_to(child_class, is_array=True),
                metadata=FieldMetadata.for_relationship(
                    api_name=child.relationship_name,
                    label=child.relationship_name,
                    reference=child_class,
                    is_child_relationship=True,
                ),
            )
        )

    return properties


def map_fields(
    config: ObjectConfig,
    fields: tuple[FieldDescriptor, ...],
    index: CrossReferenceIndex,
) -> List[PropertyDescriptor]:
    """Scalar properties for every field, plus lookup relationship properties."""
    properties = []

    for field in fields:
        relationship = _relationship_property(field, index)
        if relationship is not None:
            properties.append(relationship)

        properties.append(
            PropertyDescriptor(
                target_name=resolve_field_name(
                    config, field.raw_name, field.is_reference
                ),
                declared_type=DeclaredType.for_schema_type(field.schema_type),
                metadata=FieldMetadata.for_field(field),
                doc_text=field.inline_help_text,
            )
        )

    return properties


def _relationship_property(
    field: FieldDescriptor, index: CrossReferenceIndex
) -> Optional[PropertyDescriptor]:
    """Relationship-object property for a lookup, when its target is generated."""
    if not field.is_reference or not field.relationship_name:
        return None

    targets = [t for t in field.reference_targets if index.is_configured(t)]
    if not targets:
        return None

    if field.is_polymorphic:
        reference_class = POLYMORPHIC_TYPE_NAME
    else:
        reference_class = index.class_for(targets[0])

    # the relationship property follows the naming policy of the object it points at
    target_config = index.config_for(targets[0])

    return PropertyDescriptor(
        target_name=resolve_field_name(target_config, field.relationship_name, False),
        declared_type=DeclaredType.reference_to(reference_class),
        metadata=FieldMetadata.for_relationship(
            api_name=field.relationship_name,
            label=field.label,
            reference=reference_class,
        ),
        doc_text=field.inline_help_text,
    )
