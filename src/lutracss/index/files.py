# lutracss.index.files - Glob-based file enumeration
"""
File enumeration for the symbol index.

Patterns are editor-style globs matched against POSIX paths relative to
the project root:

- ``**/`` matches zero or more directories
- ``*`` matches within a single path segment
- ``?`` matches one character other than ``/``
- ``{a,b}`` matches either alternative
"""
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional
import os
import re


# Dependencies of dependencies are never scanned, even for important patterns
NESTED_DEPENDENCY_EXCLUDE = "**/node_modules/**/node_modules/**"


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern:
    """
    Compile a glob pattern to a regex.

    Args:
        pattern: Glob such as ``**/node_modules/lutra/**/*.css``

    Returns:
        Compiled regex to use with fullmatch()
    """
    if pattern.startswith("./"):
        pattern = pattern[2:]

    parts = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        elif pattern[i] == "{" and "}" in pattern[i:]:
            end = pattern.index("}", i)
            options = pattern[i + 1:end].split(",")
            parts.append("(?:" + "|".join(re.escape(o) for o in options) + ")")
            i = end + 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1

    return re.compile("".join(parts))


def matches_any(relative_path: str, patterns: Iterable[str]) -> bool:
    """Check a relative POSIX path against glob patterns."""
    return any(glob_to_regex(p).fullmatch(relative_path) for p in patterns)


def list_files(
    root: Path,
    prune_patterns: Iterable[str] = (),
) -> list[tuple[str, Path]]:
    """
    List every file under root.

    Symlinked directories are not followed.

    Args:
        root: Directory to walk
        prune_patterns: Exclusion globs; directories they exclude entirely
            (``<dir>/**`` patterns) are not descended into

    Returns:
        (relative POSIX path, absolute path) pairs, sorted by relative path
    """
    pruned = [p[:-3] for p in prune_patterns if p.endswith("/**")]

    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        if pruned:
            dirnames[:] = [
                d for d in dirnames
                if not matches_any((base / d).relative_to(root).as_posix(), pruned)
            ]
        dirnames.sort()
        for filename in filenames:
            path = base / filename
            files.append((path.relative_to(root).as_posix(), path))
    files.sort(key=lambda item: item[0])
    return files


def find_files(
    root: Path,
    pattern: str,
    exclude_patterns: Iterable[str] = (),
    files: Optional[list[tuple[str, Path]]] = None,
) -> list[Path]:
    """
    Find files matching a pattern, minus excluded ones.

    Args:
        root: Project root
        pattern: Glob pattern relative to root
        exclude_patterns: Glob patterns to leave out
        files: Pre-listed files (from list_files) to avoid walking again

    Returns:
        Matching paths in lexicographic order
    """
    if files is None:
        files = list_files(root)

    regex = glob_to_regex(pattern)
    exclude_patterns = list(exclude_patterns)

    return [
        path for rel, path in files
        if regex.fullmatch(rel) and not matches_any(rel, exclude_patterns)
    ]


def collect_files(
    root: Path,
    patterns: Iterable[str],
    exclude_patterns: Iterable[str] = (),
    important_patterns: Iterable[str] = (),
    files: Optional[list[tuple[str, Path]]] = None,
) -> list[Path]:
    """
    Collect files for a set of search patterns.

    Each pattern is enumerated with the exclusions applied, then the files
    matched by the important patterns are merged in. The important patterns
    guarantee that the UI library's own files are scanned even though
    node_modules is normally excluded.

    Returns:
        De-duplicated paths in traversal order
    """
    if files is None:
        files = list_files(root)

    exclude_patterns = list(exclude_patterns)
    important_patterns = list(important_patterns)

    collected: dict[Path, None] = {}
    for pattern in patterns:
        for path in find_files(root, pattern, exclude_patterns, files):
            collected.setdefault(path, None)
        for important in important_patterns:
            for path in find_files(root, important, [NESTED_DEPENDENCY_EXCLUDE], files):
                collected.setdefault(path, None)

    return list(collected)
