# lutracss.workspace.workspace - Project workspace
"""
Ties a project directory, its configuration, the symbol index and the
completion resolver together.
"""
from pathlib import Path
from typing import Mapping, Optional
import asyncio
import logging

from lutracss.completion.resolver import Candidate, CompletionResolver
from lutracss.config import Config
from lutracss.errors import ManifestError
from lutracss.index.symbol_index import SymbolIndex
from lutracss.index.variable import Variable
from lutracss.workspace.manifest import find_library_manifest

logger = logging.getLogger(__name__)


class Workspace:
    """
    A project that may use the UI library.

    Nothing is scanned until activate() finds the library in a
    package.json. An inactive workspace offers no completions.
    """

    def __init__(self, root: Path, config: Optional[Config] = None):
        """
        Initialize workspace.

        Args:
            root: Project root directory
            config: Configuration, defaults when not given
        """
        self.root = root.resolve()
        self.config = config or Config()
        self.manifest_path: Optional[Path] = None
        self.index: Optional[SymbolIndex] = None
        self.resolver: Optional[CompletionResolver] = None

    @property
    def library(self) -> str:
        return self.config.library

    @property
    def active(self) -> bool:
        """Whether the library was found and the index built."""
        return self.resolver is not None

    async def activate(self) -> bool:
        """
        Activate the workspace.

        Returns:
            True if the project uses the library and the index was built

        Raises:
            Exception: Any unexpected error while setting up the index,
                after logging it
        """
        logger.info("Checking for %s package...", self.library)

        if not self.root.is_dir():
            logger.info("Workspace folder %s not found, not activating", self.root)
            return False

        try:
            self.manifest_path = await asyncio.to_thread(
                find_library_manifest, self.root, self.library,
            )
        except ManifestError as e:
            logger.error("Error checking for %s package: %s", self.library, e)
            return False

        if self.manifest_path is None:
            logger.info(
                "%s package not found in package.json, not activating",
                self.library,
            )
            return False

        try:
            index = SymbolIndex(
                self.root,
                css_patterns=self.config.css_glob_patterns,
                svelte_patterns=self.config.svelte_glob_patterns,
                exclude_patterns=self.config.exclude_patterns,
                library=self.library,
            )
            await index.rebuild()
            self.index = index
            self.resolver = CompletionResolver(index, self.library)
        except Exception:
            logger.exception("Error during activation of %s", self.root)
            raise

        logger.info("Activated for %s (%d variables)", self.root, len(self.index))
        return True

    async def rescan(self) -> Mapping[str, Variable]:
        """
        Force an index rebuild.

        Returns:
            The new snapshot, empty when the workspace is inactive
        """
        if self.index is None:
            logger.info("Rescan requested but workspace is not active")
            return {}
        return await self.index.rebuild()

    def provide_completions(
        self,
        document_text: str,
        line: int,
        column: int,
    ) -> list[Candidate]:
        """
        Get completions for a 0-based cursor position.

        Returns:
            Candidates, empty when inactive or nothing is triggered
        """
        if self.resolver is None:
            return []
        return self.resolver.provide_completions(document_text, line, column)

    @property
    def variables(self) -> Mapping[str, Variable]:
        """Current index snapshot."""
        if self.index is None:
            return {}
        return self.index.variables

    def get_stats(self) -> dict:
        """
        Get workspace statistics.

        Returns:
            Dictionary with stats
        """
        stats = {
            "root": str(self.root),
            "library": self.library,
            "active": self.active,
            "manifest": str(self.manifest_path) if self.manifest_path else None,
        }
        if self.index is not None:
            stats.update(self.index.get_stats())
        return stats
