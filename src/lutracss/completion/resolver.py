# lutracss.completion.resolver - Completion candidates
"""
Turns the current index snapshot into completion candidates for a cursor
position.
"""
from dataclasses import dataclass
from typing import Iterable, Optional
import logging
import re

from lutracss.completion.imports import find_imported_components
from lutracss.completion.triggers import Trigger, detect_trigger, insert_text
from lutracss.index.variable import Origin, Variable

logger = logging.getLogger(__name__)

# Line breaks as editors count them; str.splitlines() knows more
LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Candidate:
    """A ready-to-insert completion."""
    label: str
    insert_text: str
    detail: str
    documentation: str
    kind: str = "variable"

    def format_text(self) -> str:
        """Format for terminal display."""
        return f"{self.label}  ({self.detail})\n    insert: {self.insert_text}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "label": self.label,
            "kind": self.kind,
            "detail": self.detail,
            "documentation": self.documentation,
            "insert_text": self.insert_text,
        }


def filter_variables(
    variables: Iterable[Variable],
    imports: Iterable[str],
) -> list[Variable]:
    """
    Keep the variables visible to a document.

    Global variables are always visible; component variables only when
    their component is imported.
    """
    imports = set(imports)
    return [
        v for v in variables
        if v.origin is Origin.GLOBAL
        or (v.origin is Origin.COMPONENT and v.component_name in imports)
    ]


def make_candidate(variable: Variable, trigger: Trigger) -> Candidate:
    """Format a variable as a completion candidate."""
    source = variable.source_label

    if variable.origin is Origin.COMPONENT:
        detail = f"CSS Property for {variable.component_name} ({source})"
    else:
        detail = f"Global CSS Variable ({source})"

    attribution = f"Source: {source}"
    if variable.description:
        documentation = f"{variable.description}\n\n{attribution}"
    else:
        documentation = attribution

    return Candidate(
        label=variable.name,
        insert_text=insert_text(variable.name, trigger),
        detail=detail,
        documentation=documentation,
    )


class CompletionResolver:
    """
    Resolves completion requests against a SymbolIndex.

    Requests only read the index snapshot; they never wait for or start
    a rebuild.
    """

    def __init__(self, index, library: str = "lutra"):
        """
        Initialize resolver.

        Args:
            index: SymbolIndex to read variables from
            library: Library name used in import statements
        """
        self.index = index
        self.library = library

    def complete(
        self,
        line_prefix: str,
        document_text: str,
        imports: Optional[Iterable[str]] = None,
    ) -> list[Candidate]:
        """
        Get candidates for a line prefix.

        Args:
            line_prefix: Current line up to the cursor
            document_text: Full document text, scanned for imports
            imports: Imported component names; computed from the
                document when not given

        Returns:
            Candidates sorted by label, empty when nothing is triggered
        """
        trigger = detect_trigger(line_prefix)
        if trigger is None:
            logger.debug(
                'Line prefix "%s" does not match completion pattern, skipping completions',
                line_prefix,
            )
            return []

        if imports is None:
            imports = find_imported_components(document_text, self.library)
        imports = frozenset(imports)
        logger.debug("Found imported components: %s", ", ".join(sorted(imports)))

        snapshot = self.index.variables
        visible = filter_variables(snapshot.values(), imports)

        candidates = [make_candidate(v, trigger) for v in visible]
        candidates.sort(key=lambda c: c.label)

        logger.debug("Returning %d completion items", len(candidates))
        return candidates

    def provide_completions(
        self,
        document_text: str,
        line: int,
        column: int,
    ) -> list[Candidate]:
        """
        Get candidates for a cursor position.

        Args:
            document_text: Full document text
            line: 0-based line number
            column: 0-based column (clamped to the line length)

        Returns:
            Candidates, empty when the position is out of range or
            nothing is triggered
        """
        logger.debug("Providing completion items at position: line %d, character %d", line + 1, column)

        lines = LINE_BREAK.split(document_text)
        if line < 0 or line >= len(lines) or column < 0:
            return []

        line_prefix = lines[line][:column]
        return self.complete(line_prefix, document_text)
