"""Describe metadata sources.

A fetcher turns an SObject api name into its ``DescribeMetadata``. The REST
fetcher talks to a Salesforce org; the file fetcher reads describe JSON
saved on disk, which is handy for offline generation and tests.
"""

import asyncio
from pathlib import Path
from typing import Protocol

from .codegen.core.schema import DescribeMetadata, describe_from_dict
from .logging_config import get_logger
from .utils import JSONLoaderError, load_json_from_file, load_json_from_url

logger = get_logger(__name__)


class DescribeError(Exception):
    """Describe metadata could not be fetched or parsed."""

    pass


class DescribeFetcher(Protocol):
    """Anything that can describe an SObject."""

    async def describe(self, api_name: str) -> DescribeMetadata: ...


class RestDescribeFetcher:
    """Fetch describe metadata from the Salesforce REST API."""

    def __init__(
        self,
        instance_url: str,
        access_token: str,
        api_version: str = "45.0",
        timeout: int = 30,
    ) -> None:
        if not instance_url or not access_token:
            raise DescribeError("instance_url and access_token are required")

        self.instance_url = instance_url.rstrip("/")
        self.access_token = access_token
        self.api_version = api_version.lstrip("v")
        self.timeout = timeout

    def describe_url(self, api_name: str) -> str:
        return (
            f"{self.instance_url}/services/data/v{self.api_version}"
            f"/sobjects/{api_name}/describe/"
        )

    async def describe(self, api_name: str) -> DescribeMetadata:
        """Describe ``api_name``; the blocking request runs in a worker thread."""
        return await asyncio.to_thread(self._describe_sync, api_name)

    def _describe_sync(self, api_name: str) -> DescribeMetadata:
        url = self.describe_url(api_name)
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }
        logger.info("Describing %s", api_name)

        try:
            data = load_json_from_url(url, headers=headers, timeout=self.timeout)
        except JSONLoaderError as e:
            raise DescribeError(f"Describe request for {api_name} failed: {e}") from e

        return describe_from_dict(data)


class FileDescribeFetcher:
    """Read describe metadata from ``<directory>/<api name>.json``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, api_name: str) -> Path:
        return self.directory / f"{api_name}.json"

    async def describe(self, api_name: str) -> DescribeMetadata:
        path = self.path_for(api_name)
        logger.info("Reading describe for %s from %s", api_name, path)

        try:
            data = load_json_from_file(path)
        except (FileNotFoundError, JSONLoaderError) as e:
            raise DescribeError(str(e)) from e

        return describe_from_dict(data)
