# lutracss.workspace.manifest - package.json inspection
"""
Checks whether a project depends on the UI library.
"""
from pathlib import Path
from typing import Iterable, Optional
import json
import logging

from lutracss.errors import ManifestError
from lutracss.index.files import find_files, list_files

logger = logging.getLogger(__name__)

MANIFEST_PATTERN = "**/package.json"
MANIFEST_EXCLUDE = ("**/node_modules/**",)
DEPENDENCY_KEYS = ("dependencies", "devDependencies")


def manifest_declares(manifest: dict, library: str) -> bool:
    """
    Check one parsed manifest.

    True when the package is the library itself or lists it as a
    dependency or dev dependency.
    """
    if manifest.get("name") == library:
        return True
    for key in DEPENDENCY_KEYS:
        deps = manifest.get(key)
        if isinstance(deps, dict) and library in deps:
            return True
    return False


def read_manifest(path: Path) -> dict:
    """
    Read and decode a package.json.

    Raises:
        ManifestError: If the file cannot be read or is not a JSON object
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise ManifestError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(path, "expected a JSON object")
    return data


def find_library_manifest(
    root: Path,
    library: str,
    exclude_patterns: Iterable[str] = MANIFEST_EXCLUDE,
) -> Optional[Path]:
    """
    Find the first manifest under root that declares the library.

    Args:
        root: Project root
        library: Library package name
        exclude_patterns: Directories not searched for manifests (pruned
            from the walk)

    Returns:
        Path of the declaring manifest, or None

    Raises:
        ManifestError: If a manifest cannot be read
    """
    exclude_patterns = list(exclude_patterns)
    files = list_files(root, exclude_patterns)
    for path in find_files(root, MANIFEST_PATTERN, exclude_patterns, files):
        if manifest_declares(read_manifest(path), library):
            logger.info("Found %s package in %s", library, path)
            return path
    return None
