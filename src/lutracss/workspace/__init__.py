# lutracss.workspace - Workspace management module
from lutracss.workspace.workspace import Workspace
from lutracss.workspace.manifest import find_library_manifest, manifest_declares
from lutracss.workspace.watcher import IndexWatcher

__all__ = [
    "Workspace",
    "find_library_manifest",
    "manifest_declares",
    "IndexWatcher",
]
