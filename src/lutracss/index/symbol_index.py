# lutracss.index.symbol_index - Variable table
"""
The symbol index: every CSS custom property known in the project.

The table is rebuilt from scratch on each scan. A rebuild fills a private
dict and then swaps the public snapshot in one assignment, so readers
never observe a half-built table.
"""
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional
import asyncio
import logging
import time

from lutracss.index.extractors import (
    component_name_for,
    extract_cssprop_tags,
    extract_declarations,
    extract_property_rules,
)
from lutracss.index.files import collect_files, list_files
from lutracss.index.variable import Origin, Variable

logger = logging.getLogger(__name__)

# Failures that make a single file contribute nothing to a rebuild
FILE_ERRORS = (OSError, UnicodeDecodeError, ValueError)


class SymbolIndex:
    """
    Index of CSS variables declared in stylesheets and lutra components.

    Stylesheets contribute global variables (``@property`` rules first,
    then plain ``--name: value;`` declarations). Svelte components
    contribute component variables through ``@cssprop`` tags.
    """

    def __init__(
        self,
        root: Path,
        css_patterns: Optional[list[str]] = None,
        svelte_patterns: Optional[list[str]] = None,
        exclude_patterns: Optional[list[str]] = None,
        library: str = "lutra",
    ):
        """
        Initialize index.

        Args:
            root: Project root that patterns are relative to
            css_patterns: Stylesheet search patterns
            svelte_patterns: Component search patterns
            exclude_patterns: Patterns excluded from both searches
            library: UI library whose bundled files are always scanned
        """
        self.root = root
        self.css_patterns = list(css_patterns or [])
        self.svelte_patterns = list(svelte_patterns or [])
        self.exclude_patterns = list(exclude_patterns or [])
        self.library = library

        self._variables: Mapping[str, Variable] = MappingProxyType({})
        self.rebuild_count = 0
        self.last_rebuild_at: Optional[float] = None
        self.last_rebuild_ms = 0.0
        self.files_scanned = 0
        self.files_failed = 0

    @property
    def important_css_patterns(self) -> list[str]:
        """Stylesheets bundled with the library."""
        return [f"**/node_modules/{self.library}/**/*.css"]

    @property
    def important_svelte_patterns(self) -> list[str]:
        """Components bundled with the library."""
        return [f"**/node_modules/{self.library}/**/*.svelte"]

    @property
    def variables(self) -> Mapping[str, Variable]:
        """Read-only snapshot of the current table."""
        return self._variables

    async def rebuild(self) -> Mapping[str, Variable]:
        """
        Rebuild the table from the files on disk.

        Returns:
            The new snapshot
        """
        logger.info("Starting variable update")
        start = time.perf_counter()

        table: dict[str, Variable] = {}
        formal_names: set[str] = set()
        stats = {"scanned": 0, "failed": 0}

        files = await asyncio.to_thread(list_files, self.root)

        css_files = collect_files(
            self.root,
            self.css_patterns,
            self.exclude_patterns,
            self.important_css_patterns,
            files,
        )
        logger.info("Found %d stylesheet files", len(css_files))
        for path in css_files:
            await self._scan_stylesheet(path, table, formal_names, stats)

        svelte_files = collect_files(
            self.root,
            self.svelte_patterns,
            self.exclude_patterns,
            self.important_svelte_patterns,
            files,
        )
        logger.info("Found %d component files", len(svelte_files))
        for path in svelte_files:
            await self._scan_component(path, table, stats)

        self._variables = MappingProxyType(table)
        self.rebuild_count += 1
        self.last_rebuild_at = time.time()
        self.last_rebuild_ms = (time.perf_counter() - start) * 1000
        self.files_scanned = stats["scanned"]
        self.files_failed = stats["failed"]

        logger.info("Variable update complete. Total variables: %d", len(table))
        return self._variables

    async def _read(self, path: Path) -> Optional[str]:
        """Read a file, or log and return None on failure."""
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FILE_ERRORS as e:
            logger.warning("Error processing file %s: %s", path, e)
            return None

    async def _scan_stylesheet(
        self,
        path: Path,
        table: dict[str, Variable],
        formal_names: set[str],
        stats: dict,
    ) -> None:
        content = await self._read(path)
        if content is None:
            stats["failed"] += 1
            return

        try:
            formal = await asyncio.to_thread(extract_property_rules, content, path)
            plain = await asyncio.to_thread(extract_declarations, content, path)
        except FILE_ERRORS as e:
            logger.warning("Error processing file %s: %s", path, e)
            stats["failed"] += 1
            return

        for variable in formal:
            table[variable.name] = variable
            formal_names.add(variable.name)

        added = 0
        for variable in plain:
            if variable.name in formal_names:
                continue
            table[variable.name] = variable
            added += 1

        stats["scanned"] += 1
        logger.debug(
            "Extracted %d @property and %d plain variables from %s",
            len(formal), added, path,
        )

    async def _scan_component(
        self,
        path: Path,
        table: dict[str, Variable],
        stats: dict,
    ) -> None:
        content = await self._read(path)
        if content is None:
            stats["failed"] += 1
            return

        component_name = component_name_for(path)
        try:
            tags = await asyncio.to_thread(extract_cssprop_tags, content, component_name, path)
        except FILE_ERRORS as e:
            logger.warning("Error processing file %s: %s", path, e)
            stats["failed"] += 1
            return

        for variable in tags:
            table[variable.name] = variable

        stats["scanned"] += 1
        logger.debug(
            "Extracted %d CSS properties from Svelte component %s",
            len(tags), component_name,
        )

    def get(self, name: str) -> Optional[Variable]:
        """Get a variable by name (with or without the leading ``--``)."""
        if not name.startswith("--"):
            name = "--" + name
        return self._variables.get(name)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._variables.values())

    def __len__(self) -> int:
        return len(self._variables)

    def get_stats(self) -> dict:
        """
        Get index statistics.

        Returns:
            Dictionary with counts and rebuild info
        """
        variables = self._variables.values()
        components = {v.component_name for v in variables if v.origin is Origin.COMPONENT}
        return {
            "variable_count": len(self._variables),
            "global_count": sum(1 for v in variables if v.origin is Origin.GLOBAL),
            "component_count": sum(1 for v in variables if v.origin is Origin.COMPONENT),
            "components": sorted(components),
            "files_scanned": self.files_scanned,
            "files_failed": self.files_failed,
            "rebuild_count": self.rebuild_count,
            "last_rebuild_ms": round(self.last_rebuild_ms, 1),
        }
