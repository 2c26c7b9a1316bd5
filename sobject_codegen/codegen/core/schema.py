"""
Core describe-metadata representation for code generation.

Converts raw SObject describe documents into a normalized, read-only
format that the mapper and generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple
from enum import Enum

from ...logging_config import get_logger

logger = get_logger(__name__)


class DescribeFormatError(ValueError):
    """Raised when a describe document is missing required keys."""

    pass


class SchemaType(str, Enum):
    """Salesforce field types as reported by the describe call."""

    STRING = "string"
    ID = "id"
    REFERENCE = "reference"
    BOOLEAN = "boolean"
    DOUBLE = "double"
    INT = "int"
    INTEGER = "integer"
    LONG = "long"
    CURRENCY = "currency"
    PERCENT = "percent"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    LOCATION = "location"
    ADDRESS = "address"
    PICKLIST = "picklist"
    MULTIPICKLIST = "multipicklist"
    COMBOBOX = "combobox"
    TEXTAREA = "textarea"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    ENCRYPTEDSTRING = "encryptedstring"
    BASE64 = "base64"
    ANYTYPE = "anyType"
    COMPLEXVALUE = "complexvalue"
    JSON = "json"

    @classmethod
    def from_describe(cls, value: str) -> "SchemaType":
        """Look up a describe type string, case-insensitively."""
        lowered = str(value).lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        logger.warning("Unknown describe field type %r, treating as anyType", value)
        return cls.ANYTYPE


@dataclass(frozen=True)
class FieldDescriptor:
    """A single field of an SObject describe."""

    raw_name: str
    label: str
    schema_type: SchemaType
    createable: bool = False
    updateable: bool = False
    nillable: bool = True
    external_id: bool = False
    reference_targets: Tuple[str, ...] = ()
    relationship_name: Optional[str] = None
    inline_help_text: Optional[str] = None

    @property
    def is_reference(self) -> bool:
        return self.schema_type == SchemaType.REFERENCE

    @property
    def is_polymorphic(self) -> bool:
        """Lookup that may point at more than one object type."""
        return len(self.reference_targets) > 1


@dataclass(frozen=True)
class ChildRelationshipDescriptor:
    """A one-to-many relationship from this object to a child object."""

    child_object_api_name: str
    relationship_name: Optional[str] = None
    deprecated_and_hidden: bool = False


@dataclass(frozen=True)
class DescribeMetadata:
    """Describe result for one SObject."""

    api_name: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    child_relationships: Tuple[ChildRelationshipDescriptor, ...] = field(
        default_factory=tuple
    )

    def get_field(self, raw_name: str) -> Optional[FieldDescriptor]:
        """Get field by raw api name (case-insensitive)."""
        for f in self.fields:
            if f.raw_name.lower() == raw_name.lower():
                return f
        return None


def describe_from_dict(data: Dict[str, Any]) -> DescribeMetadata:
    """
    Convert a raw describe JSON document to DescribeMetadata.

    Args:
        data: Parsed body of ``/sobjects/{name}/describe``

    Returns:
        DescribeMetadata with fields and child relationships in describe order

    Raises:
        DescribeFormatError: If required keys are missing
    """
    if not isinstance(data, dict):
        raise DescribeFormatError(
            f"Describe document must be an object, got {type(data).__name__}"
        )

    try:
        api_name = data["name"]
    except KeyError:
        raise DescribeFormatError("Describe document has no 'name'") from None

    fields: List[FieldDescriptor] = []
    for raw in data.get("fields") or []:
        try:
            fields.append(_field_from_dict(raw))
        except KeyError as e:
            raise DescribeFormatError(
                f"Field in {api_name} describe is missing key {e}"
            ) from e

    children: List[ChildRelationshipDescriptor] = []
    for raw in data.get("childRelationships") or []:
        try:
            children.append(
                ChildRelationshipDescriptor(
                    child_object_api_name=raw["childSObject"],
                    relationship_name=raw.get("relationshipName"),
                    deprecated_and_hidden=bool(raw.get("deprecatedAndHidden", False)),
                )
            )
        except KeyError as e:
            raise DescribeFormatError(
                f"Child relationship in {api_name} describe is missing key {e}"
            ) from e

    return DescribeMetadata(
        api_name=api_name, fields=tuple(fields), child_relationships=tuple(children)
    )


def _field_from_dict(raw: Dict[str, Any]) -> FieldDescriptor:
    name = raw["name"]
    return FieldDescriptor(
        raw_name=name,
        label=raw.get("label") or name,
        schema_type=SchemaType.from_describe(raw["type"]),
        createable=bool(raw.get("createable", False)),
        updateable=bool(raw.get("updateable", False)),
        nillable=bool(raw.get("nillable", True)),
        external_id=bool(raw.get("externalId", False)),
        reference_targets=tuple(raw.get("referenceTo") or ()),
        relationship_name=raw.get("relationshipName"),
        inline_help_text=raw.get("inlineHelpText"),
    )
