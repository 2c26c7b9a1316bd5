"""
Python code generator implementation.

Generates a ``TypedDict`` property contract and a ``RestObject`` subclass
per SObject using templates.
"""

from typing import Dict, List, Any, Optional, Sequence
from pathlib import Path

from ...core.generator import CodeGenerator, SObjectDeclaration
from ...core.config import GeneratorConfig
from ...core.mapper import FieldMetadata, TypeKind, POLYMORPHIC_TYPE_NAME
from ...core.naming import CrossReferenceIndex
from .naming import python_property_name

DEFAULT_RUNTIME_MODULE = "sobject_runtime"

PYTHON_TYPE_MAP = {
    TypeKind.STRING: "str",
    TypeKind.NUMBER: "float",
    TypeKind.BOOLEAN: "bool",
    TypeKind.DATE: "datetime",
    TypeKind.LOCATION: "SFLocation",
}

RUNTIME_IMPORTS = [
    "UNSET",
    "RestObject",
    "SFieldProperties",
    "SObject",
    "SalesforceFieldType",
    "sfield",
]


class PythonGenerator(CodeGenerator):
    """Code generator for Python SObject classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)
        self.runtime_module = self.config.runtime_module or DEFAULT_RUNTIME_MODULE

    @property
    def language_name(self) -> str:
        return "python"

    @property
    def file_extension(self) -> str:
        return ".py"

    @property
    def primitive_types(self) -> Dict[TypeKind, str]:
        return PYTHON_TYPE_MAP

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def array_type(self, element_type: str) -> str:
        return f"list[{element_type}]"

    def generate(
        self, declarations: Sequence[SObjectDeclaration], index: CrossReferenceIndex
    ) -> str:
        """Generate one Python module holding every declaration."""
        bodies = [self.generate_single_declaration(d, index) for d in declarations]

        kinds_used = {
            p.declared_type.kind for d in declarations for p in d.properties
        }
        context = {
            "uses_datetime": TypeKind.DATE in kinds_used,
            "runtime_module": self.runtime_module,
            "imports": self.get_import_statements(declarations),
            "declarations": bodies,
        }
        return self.render_template("module.py.j2", context)

    def generate_single_declaration(
        self, declaration: SObjectDeclaration, index: CrossReferenceIndex
    ) -> str:
        """Generate the TypedDict contract and class for one SObject."""
        return self.render_template(
            "sobject.py.j2", self._declaration_context(declaration, index)
        )

    def _declaration_context(
        self, declaration: SObjectDeclaration, index: CrossReferenceIndex
    ) -> Dict[str, Any]:
        properties = []
        for prop in declaration.properties:
            doc = prop.doc_text if self.config.add_comments else None
            properties.append(
                {
                    "name": python_property_name(prop.target_name),
                    "type": self.type_name(prop.declared_type, index),
                    "contract_type": self.type_name(
                        prop.declared_type, index, contract=True
                    ),
                    "field": self.sfield_call(prop.metadata),
                    "doc": doc,
                }
            )

        return {
            "api_name": repr(declaration.api_name),
            "raw_api_name": declaration.api_name,
            "class_name": declaration.class_name,
            "contract_name": declaration.contract_name,
            "properties": properties,
        }

    def sfield_call(self, meta: FieldMetadata) -> str:
        """``sfield(...)`` expression carrying a property's metadata."""
        reference = f"lambda: {meta.reference}" if meta.reference else "None"
        arguments = [
            ("api_name", repr(meta.api_name)),
            ("createable", repr(meta.createable)),
            ("updateable", repr(meta.updateable)),
            ("required", repr(meta.required)),
            ("reference", reference),
            ("child_relationship", repr(meta.is_child_relationship)),
            ("salesforce_type", f"SalesforceFieldType.{meta.salesforce_type.name}"),
            ("salesforce_label", repr(meta.label or "")),
            ("external_id", repr(meta.external_id)),
        ]
        return "sfield(" + ", ".join(f"{k}={v}" for k, v in arguments) + ")"

    def get_import_statements(
        self, declarations: Sequence[SObjectDeclaration]
    ) -> List[str]:
        """Names imported from the runtime module."""
        names = list(RUNTIME_IMPORTS)
        declared = [p.declared_type for d in declarations for p in d.properties]

        if any(t.kind == TypeKind.LOCATION for t in declared):
            names.append("SFLocation")
        if any(t.reference == POLYMORPHIC_TYPE_NAME for t in declared):
            names.append(POLYMORPHIC_TYPE_NAME)

        return sorted(names, key=str.lower)

    def validate_declarations(
        self, declarations: Sequence[SObjectDeclaration]
    ) -> List[str]:
        """Validate declarations for Python generation."""
        warnings = super().validate_declarations(declarations)

        for declaration in declarations:
            for prop in declaration.properties:
                escaped = python_property_name(prop.target_name)
                if escaped != prop.target_name:
                    warnings.append(
                        f"Property {declaration.class_name}.{prop.target_name} "
                        f"renamed to {escaped}"
                    )

        return warnings


def create_python_generator(config: GeneratorConfig = None) -> PythonGenerator:
    """Create a Python generator."""
    return PythonGenerator(config)
