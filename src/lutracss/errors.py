# lutracss.errors - Exception types
"""
Exceptions raised by lutracss.
"""


class LutraCssError(Exception):
    """Base class for lutracss errors."""


class ManifestError(LutraCssError):
    """A package.json manifest could not be read or decoded."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read manifest {path}: {reason}")
