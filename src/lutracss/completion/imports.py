# lutracss.completion.imports - Component import resolution
"""
Finds the lutra components a document imports.
"""
import re


def _import_pattern(library: str) -> re.Pattern:
    return re.compile(
        r"import\s*\{(?P<names>[^}]+)\}\s*from\s*(?P<quote>['\"])"
        + re.escape(library)
        + r"(?:/[^'\"]*)?(?P=quote)\s*;?"
    )


def find_imported_components(document_text: str, library: str = "lutra") -> frozenset[str]:
    """
    Collect component names imported from the library.

    Handles ``import { Button, Card as Panel } from 'lutra'``; aliased
    imports contribute the exported name (``Card``).

    Args:
        document_text: Full document text
        library: Library module name

    Returns:
        Set of imported component names
    """
    components = set()

    for match in _import_pattern(library).finditer(document_text):
        for entry in match.group("names").split(","):
            name = re.split(r"\s+as\s+", entry.strip())[0]
            if name.startswith("type "):
                name = name[5:].strip()
            if name:
                components.add(name)

    return frozenset(components)
