"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Any, Optional, Sequence
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .mapper import DeclaredType, PropertyDescriptor, TypeKind
from .naming import CrossReferenceIndex
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class MetadataFetchError(GeneratorError):
    """Describe metadata for a configured object could not be retrieved."""

    def __init__(self, api_name: str, cause: Optional[BaseException] = None):
        self.api_name = api_name
        self.cause = cause
        message = (
            f"Could not retrieve describe metadata for {api_name}. "
            "Check SObject spelling and authorization"
        )
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)


class EmissionError(GeneratorError):
    """A generator failed to render declarations."""

    pass


@dataclass(frozen=True)
class SObjectDeclaration:
    """Everything a generator needs to emit one class/contract pair."""

    api_name: str
    class_name: str
    contract_name: str
    properties: tuple[PropertyDescriptor, ...]


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts', '.py')."""
        pass

    @property
    @abstractmethod
    def primitive_types(self) -> Dict[TypeKind, str]:
        """Target-language spelling of every non-reference TypeKind."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(
        self, declarations: Sequence[SObjectDeclaration], index: CrossReferenceIndex
    ) -> str:
        """
        Generate a complete source file for all declarations.

        Args:
            declarations: Mapped objects in configuration order
            index: Cross-reference index of the run

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def generate_single_declaration(
        self, declaration: SObjectDeclaration, index: CrossReferenceIndex
    ) -> str:
        """Generate the contract and class for one object."""
        pass

    def array_type(self, element_type: str) -> str:
        """Spell an array of ``element_type``."""
        return f"{element_type}[]"

    def type_name(
        self,
        declared_type: DeclaredType,
        index: CrossReferenceIndex,
        contract: bool = False,
    ) -> str:
        """
        Spell a declared type in the target language.

        Args:
            declared_type: Type to render
            index: Used to swap class names for contract names
            contract: Render for the contract type rather than the class
        """
        if declared_type.kind == TypeKind.REFERENCE:
            base = declared_type.reference
            if contract:
                base = index.contract_for(base)
        else:
            base = self.primitive_types[declared_type.kind]

        if declared_type.is_array:
            return self.array_type(base)
        return base

    def get_import_statements(
        self, declarations: Sequence[SObjectDeclaration]
    ) -> List[str]:
        """Import statements required by the generated file."""
        return []

    def validate_declarations(
        self, declarations: Sequence[SObjectDeclaration]
    ) -> List[str]:
        """
        Validate declarations for structural issues.

        Language generators should override this to add language-specific validation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for declaration in declarations:
            if not declaration.properties:
                warnings.append(
                    f"{declaration.class_name} has no properties"
                )

            counts = Counter(p.target_name for p in declaration.properties)
            for name, count in counts.items():
                if count > 1:
                    warnings.append(
                        f"Property '{name}' is declared {count} times on "
                        f"{declaration.class_name}; add a field mapping to rename it"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}


def generate_code(
    generator: CodeGenerator,
    declarations: Sequence[SObjectDeclaration],
    index: CrossReferenceIndex,
) -> GenerationResult:
    """
    Render declarations with a generator.

    Args:
        generator: Code generator instance
        declarations: Mapped objects
        index: Cross-reference index of the run

    Returns:
        GenerationResult with code, warnings, and metadata

    Raises:
        EmissionError: If the generator fails
    """
    warnings = generator.validate_declarations(declarations)
    for warning in warnings:
        logger.warning(warning)

    try:
        code = generator.generate(declarations, index)
        formatted_code = generator.format_code(code)
    except Exception as e:
        raise EmissionError(
            f"{generator.language_name} code generation failed: {e}"
        ) from e

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "object_count": len(declarations),
        "property_count": sum(len(d.properties) for d in declarations),
        "classes": [d.class_name for d in declarations],
    }

    return GenerationResult(formatted_code, warnings, metadata)
