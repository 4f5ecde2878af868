# lutracss.index.variable - Indexed CSS variable
"""
Data types for the symbol index.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
import re


NAME_PATTERN = re.compile(r"^--[\w-]+$")


class Origin(Enum):
    """Where a variable was declared."""
    GLOBAL = "global"  # stylesheet, visible everywhere
    COMPONENT = "component"  # @cssprop tag, visible where the component is imported


def is_valid_name(name: str) -> bool:
    """Check that a name is a custom property name (``--foo-bar``)."""
    return bool(NAME_PATTERN.match(name))


@dataclass(frozen=True)
class Variable:
    """A CSS custom property known to the index."""
    name: str
    origin: Origin
    description: Optional[str] = None
    component_name: Optional[str] = None
    source_file: Optional[Path] = None

    def __post_init__(self):
        if not is_valid_name(self.name):
            raise ValueError(f"Invalid custom property name: {self.name!r}")
        if self.origin is Origin.COMPONENT and not self.component_name:
            raise ValueError(f"Component variable {self.name} needs a component name")
        if self.origin is Origin.GLOBAL and self.component_name:
            raise ValueError(f"Global variable {self.name} cannot have a component name")

    @property
    def bare_name(self) -> str:
        """Name without the leading ``--``."""
        return self.name[2:]

    @property
    def source_label(self) -> str:
        """Source file for display, or a placeholder."""
        return str(self.source_file) if self.source_file else "<unknown>"

    def format_text(self) -> str:
        """Format for terminal display."""
        if self.origin is Origin.COMPONENT:
            header = f"{self.name}  [{self.component_name}]"
        else:
            header = f"{self.name}  [global]"
        lines = [header, f"    Source: {self.source_label}"]
        if self.description:
            for line in self.description.split("\n"):
                lines.append(f"    {line}" if line else "")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "origin": self.origin.value,
            "component_name": self.component_name,
            "source_file": str(self.source_file) if self.source_file else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Variable":
        """Create from dictionary."""
        source = data.get("source_file")
        return cls(
            name=data["name"],
            origin=Origin(data["origin"]),
            description=data.get("description"),
            component_name=data.get("component_name"),
            source_file=Path(source) if source else None,
        )

    def __str__(self) -> str:
        return self.name
