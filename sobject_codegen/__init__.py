"""
sobject-codegen

Generates strongly typed SObject classes from Salesforce describe metadata.
"""

import asyncio
from typing import Optional, Sequence

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    ObjectConfig,
    SObjectGenerator,
    get_generator,
)
from .fetchers import DescribeFetcher, FileDescribeFetcher, RestDescribeFetcher

__version__ = "0.1.0"


def create_fetcher(config: GeneratorConfig) -> DescribeFetcher:
    """
    Pick a describe source from configuration.

    A describe directory wins over REST credentials so that offline runs
    never touch an org.
    """
    if config.describe_dir:
        return FileDescribeFetcher(config.describe_dir)
    return RestDescribeFetcher(
        instance_url=config.instance_url,
        access_token=config.access_token,
        api_version=config.api_version,
    )


async def generate_async(
    config: GeneratorConfig,
    fetcher: Optional[DescribeFetcher] = None,
    on_progress=None,
) -> GenerationResult:
    """Run the generation pipeline described by ``config``."""
    emitter = get_generator(config.language, config)
    pipeline = SObjectGenerator(
        emitter,
        fetcher or create_fetcher(config),
        config.sobjects,
        on_progress=on_progress,
    )
    return await pipeline.generate()


def generate_from_configs(
    sobjects: Sequence[ObjectConfig],
    fetcher: DescribeFetcher,
    language: str = "typescript",
    **options,
) -> GenerationResult:
    """
    Quick synchronous generation.

    Args:
        sobjects: Objects to generate
        fetcher: Describe source
        language: Target language name or alias
        **options: Other GeneratorConfig fields

    Returns:
        GenerationResult with the generated code
    """
    config = GeneratorConfig(language=language, sobjects=list(sobjects), **options)
    return asyncio.run(generate_async(config, fetcher))


__all__ = [
    "__version__",
    "create_fetcher",
    "generate_async",
    "generate_from_configs",
]
