# lutracss.config.config - Configuration management
"""
Configuration file loading and management.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import sys

# Use tomli for Python < 3.11, tomllib for 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY = "lutra"
CONFIG_FILENAME = ".lutracss.toml"


@dataclass
class Config:
    """
    lutracss configuration.

    Configuration file locations (in order of precedence):
    1. --config argument
    2. .lutracss.toml in the project root
    3. ~/.config/lutracss/config.toml
    """

    # UI library whose components and stylesheets are indexed
    library: str = DEFAULT_LIBRARY

    # Search patterns, relative to the project root
    css_glob_patterns: list[str] = field(
        default_factory=lambda: ["**/*.css", "**/node_modules/lutra/**/*.css"]
    )
    svelte_glob_patterns: list[str] = field(
        default_factory=lambda: ["**/node_modules/lutra/**/*.svelte"]
    )
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "**/node_modules/**",
            "**/dist/**",
            "**/.svelte-kit/**",
            "**/build/**",
        ]
    )

    # Diagnostic output
    enable_logging: bool = False

    # REPL settings
    history_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """
        Create config from dictionary.

        Keys with the wrong type are ignored and keep their default.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        config = cls()

        if isinstance(data.get("library"), str) and data["library"].strip():
            config.library = data["library"].strip()

        for key in ("css_glob_patterns", "svelte_glob_patterns", "exclude_patterns"):
            if key in data:
                patterns = _string_list(data[key])
                if patterns is None:
                    logger.warning("Ignoring config key %s: expected a list of strings", key)
                else:
                    setattr(config, key, patterns)

        if "enable_logging" in data:
            if isinstance(data["enable_logging"], bool):
                config.enable_logging = data["enable_logging"]
            else:
                logger.warning("Ignoring config key enable_logging: expected a boolean")

        repl = data.get("repl", {})
        if isinstance(repl, dict) and repl.get("history_file"):
            config.history_file = Path(repl["history_file"]).expanduser()

        return config

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "library": self.library,
            "css_glob_patterns": list(self.css_glob_patterns),
            "svelte_glob_patterns": list(self.svelte_glob_patterns),
            "exclude_patterns": list(self.exclude_patterns),
            "enable_logging": self.enable_logging,
            "repl": {
                "history_file": str(self.history_file) if self.history_file else None,
            },
        }


def _string_list(value) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return list(value)


def load_config(
    config_path: Optional[Path] = None,
    project_root: Optional[Path] = None,
) -> Config:
    """
    Load configuration.

    Args:
        config_path: Optional explicit config path
        project_root: Project directory searched for .lutracss.toml

    Returns:
        Config instance
    """
    # Try explicit path first
    if config_path and config_path.exists():
        return _load_from_file(config_path)

    # Try project directory
    local_config = (project_root or Path(".")) / CONFIG_FILENAME
    if local_config.exists():
        return _load_from_file(local_config)

    # Try user config directory
    user_config = Path.home() / ".config" / "lutracss" / "config.toml"
    if user_config.exists():
        return _load_from_file(user_config)

    # Return defaults
    return Config()


def _load_from_file(path: Path) -> Config:
    """Load config from TOML file."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return Config()
    return Config.from_dict(data)
