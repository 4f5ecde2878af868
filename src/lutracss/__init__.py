# lutracss - CSS variable completion for lutra projects
"""
lutracss indexes CSS custom properties declared in a project's stylesheets
and lutra Svelte components, and offers them as completions.
"""

from lutracss.version import __version__

__all__ = ["__version__"]
