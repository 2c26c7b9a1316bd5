"""
TypeScript code generator implementation.

Generates ts-force ``RestObject`` classes and their read-only property
interfaces from mapped SObject declarations.
"""

from typing import Dict, List, Any, Optional, Sequence
from pathlib import Path

from ...core.generator import CodeGenerator, SObjectDeclaration
from ...core.config import GeneratorConfig
from ...core.mapper import FieldMetadata, TypeKind, POLYMORPHIC_TYPE_NAME
from ...core.naming import CrossReferenceIndex

DEFAULT_RUNTIME_MODULE = "ts-force"

TYPESCRIPT_TYPE_MAP = {
    TypeKind.STRING: "string",
    TypeKind.NUMBER: "number",
    TypeKind.BOOLEAN: "boolean",
    TypeKind.DATE: "Date",
    TypeKind.LOCATION: "SFLocation",
}

RUNTIME_IMPORTS = [
    "RestObject",
    "SObject",
    "sField",
    "SalesforceFieldType",
    "SFLocation",
    "SFieldProperties",
]


def ts_string(value: str) -> str:
    """Single-quoted TypeScript string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def ts_bool(value: bool) -> str:
    return "true" if value else "false"


class TypeScriptGenerator(CodeGenerator):
    """Code generator for ts-force SObject classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)
        self.runtime_module = self.config.runtime_module or DEFAULT_RUNTIME_MODULE

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    @property
    def primitive_types(self) -> Dict[TypeKind, str]:
        return TYPESCRIPT_TYPE_MAP

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def generate(
        self, declarations: Sequence[SObjectDeclaration], index: CrossReferenceIndex
    ) -> str:
        """Generate one TypeScript module holding every declaration."""
        bodies = [self.generate_single_declaration(d, index) for d in declarations]

        context = {
            "runtime_module": self.runtime_module,
            "imports": self.get_import_statements(declarations),
            "declarations": bodies,
        }
        return self.render_template("file.ts.j2", context)

    def generate_single_declaration(
        self, declaration: SObjectDeclaration, index: CrossReferenceIndex
    ) -> str:
        """Generate the interface and class for one SObject."""
        return self.render_template(
            "sobject.ts.j2", self._declaration_context(declaration, index)
        )

    def _declaration_context(
        self, declaration: SObjectDeclaration, index: CrossReferenceIndex
    ) -> Dict[str, Any]:
        properties = []
        for prop in declaration.properties:
            doc = prop.doc_text if self.config.add_comments else None
            properties.append(
                {
                    "name": prop.target_name,
                    "type": self.type_name(prop.declared_type, index),
                    "contract_type": self.type_name(
                        prop.declared_type, index, contract=True
                    ),
                    "decorator": self.decorator_arguments(prop.metadata),
                    "doc": doc,
                }
            )

        return {
            "api_name": ts_string(declaration.api_name),
            "raw_api_name": declaration.api_name,
            "class_name": declaration.class_name,
            "contract_name": declaration.contract_name,
            "properties": properties,
        }

    def decorator_arguments(self, meta: FieldMetadata) -> str:
        """Object literal passed to ``@sField``."""
        if meta.reference is not None:
            reference = f"() => {{ return {meta.reference}; }}"
        else:
            reference = "undefined"

        pairs = [
            ("apiName", ts_string(meta.api_name)),
            ("createable", ts_bool(meta.createable)),
            ("updateable", ts_bool(meta.updateable)),
            ("required", ts_bool(meta.required)),
            ("reference", reference),
            ("childRelationship", ts_bool(meta.is_child_relationship)),
            (
                "salesforceType",
                f"SalesforceFieldType.{meta.salesforce_type.value.upper()}",
            ),
            ("salesforceLabel", ts_string(meta.label or "")),
            ("externalId", ts_bool(meta.external_id)),
        ]
        return "{ " + ", ".join(f"{key}: {value}" for key, value in pairs) + " }"

    def get_import_statements(
        self, declarations: Sequence[SObjectDeclaration]
    ) -> List[str]:
        """Names imported from the runtime module."""
        names = list(RUNTIME_IMPORTS)
        if any(
            p.declared_type.reference == POLYMORPHIC_TYPE_NAME
            for d in declarations
            for p in d.properties
        ):
            names.append(POLYMORPHIC_TYPE_NAME)
        return names


def create_typescript_generator(config: GeneratorConfig = None) -> TypeScriptGenerator:
    """Create a TypeScript generator."""
    return TypeScriptGenerator(config)
