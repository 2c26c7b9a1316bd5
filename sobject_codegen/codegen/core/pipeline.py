"""
Generation pipeline.

Builds the cross-reference index, then describes and maps each configured
object one at a time before handing the full set to a generator.
"""

from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from ...logging_config import get_logger
from .config import ObjectConfig
from .generator import (
    CodeGenerator,
    GenerationResult,
    MetadataFetchError,
    SObjectDeclaration,
    generate_code,
)
from .mapper import map_object
from .naming import build_index, resolve_class_name

if TYPE_CHECKING:
    from ...fetchers import DescribeFetcher

logger = get_logger(__name__)

ProgressCallback = Callable[[str], None]


class SObjectGenerator:
    """Drives describe -> map -> emit for a list of configured objects."""

    def __init__(
        self,
        emitter: CodeGenerator,
        fetcher: "DescribeFetcher",
        object_configs: Sequence[ObjectConfig],
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Args:
            emitter: Language generator that renders the declarations
            fetcher: Object with ``async describe(api_name)``
            object_configs: Objects to generate, in output order
            on_progress: Called with a status line before each object
        """
        self.emitter = emitter
        self.fetcher = fetcher
        self.object_configs = list(object_configs)
        self.on_progress = on_progress

        # Every class/contract name is known before the first describe, so an
        # object can reference one that is generated later in the loop.
        self.index = build_index(self.object_configs)

    def _progress(self, message: str) -> None:
        if self.on_progress is not None:
            self.on_progress(message)

    async def build_declaration(self, config: ObjectConfig) -> SObjectDeclaration:
        """Describe and map one object."""
        self._progress(f"Generating: {config.api_name}")

        try:
            describe = await self.fetcher.describe(config.api_name)
        except Exception as e:
            raise MetadataFetchError(config.api_name, e) from e

        properties = map_object(config, describe, self.index)
        class_name = resolve_class_name(config)
        logger.info(
            "Mapped %s -> %s (%d properties)",
            config.api_name,
            class_name,
            len(properties),
        )

        return SObjectDeclaration(
            api_name=config.api_name,
            class_name=class_name,
            contract_name=self.index[class_name],
            properties=tuple(properties),
        )

    async def build_declarations(self) -> List[SObjectDeclaration]:
        """Describe and map every configured object, sequentially."""
        declarations = []
        for config in self.object_configs:
            declarations.append(await self.build_declaration(config))
        return declarations

    async def generate(self) -> GenerationResult:
        """
        Run the whole pipeline.

        Returns:
            GenerationResult for the complete file

        Raises:
            MetadataFetchError: A describe failed (names the object)
            EmissionError: The generator failed to render
        """
        declarations = await self.build_declarations()
        self._progress(f"Rendering {self.emitter.language_name} declarations")
        return generate_code(self.emitter, declarations, self.index)
