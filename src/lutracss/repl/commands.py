# lutracss.repl.commands - Meta command handlers
"""
Handles / prefixed meta commands in the REPL.
"""
from typing import Callable
import asyncio

from lutracss.index.variable import Origin


class MetaCommandHandler:
    """
    Handles meta commands (/ prefixed) in the REPL.

    Meta commands:
    - /rescan - Rebuild the variable index
    - /list [filter] - List indexed variables
    - /info <name> - Show one variable
    - /imports [names...] - Show or set imported components
    - /clear - Forget the lines typed so far
    - /stats - Show index statistics
    - /help [command] - Show help
    - /quit - Exit REPL
    """

    def __init__(self, workspace, document):
        """
        Initialize handler.

        Args:
            workspace: The workspace
            document: REPL document state
        """
        self.workspace = workspace
        self.document = document

        # Command registry
        self.commands: dict[str, Callable] = {
            "rescan": self.cmd_rescan,
            "list": self.cmd_list,
            "vars": self.cmd_list,
            "info": self.cmd_info,
            "imports": self.cmd_imports,
            "clear": self.cmd_clear,
            "stats": self.cmd_stats,
            "help": self.cmd_help,
            "quit": self.cmd_quit,
            "exit": self.cmd_quit,
            "q": self.cmd_quit,
        }

        self.help_text: dict[str, str] = {
            "rescan": "Rebuild the CSS variable index",
            "list": "List indexed variables: /list [filter]",
            "info": "Show a variable: /info <name>",
            "imports": "Show or set imported components: /imports [name ...]",
            "clear": "Forget typed lines and imports",
            "stats": "Show index statistics",
            "help": "Show help: /help [command]",
            "quit": "Exit the REPL",
        }

    def execute(self, command: str, args: list[str]) -> tuple[str, bool]:
        """
        Execute a meta command.

        Args:
            command: Command name (without /)
            args: Command arguments

        Returns:
            Tuple of (output_message, should_exit)
        """
        handler = self.commands.get(command.lower())
        if not handler:
            return f"Unknown command: /{command}", False

        try:
            return handler(args)
        except Exception as e:
            return f"Error: {e}", False

    def list_commands(self) -> list[str]:
        """Get list of unique command names."""
        return list(self.help_text.keys())

    def get_help_short(self, command: str) -> str:
        """Get short help for command."""
        return self.help_text.get(command, "")

    # Command implementations

    def cmd_rescan(self, args: list[str]) -> tuple[str, bool]:
        """Rebuild the index."""
        if not self.workspace.active:
            return "Workspace is not active", False

        variables = asyncio.run(self.workspace.rescan())
        return f"Rescanned CSS variables: {len(variables)} found", False

    def cmd_list(self, args: list[str]) -> tuple[str, bool]:
        """List indexed variables."""
        variables = sorted(self.workspace.variables.values(), key=lambda v: v.name)
        if args:
            needle = args[0].lower()
            variables = [
                v for v in variables
                if needle in v.name.lower()
                or needle in (v.component_name or "").lower()
            ]

        if not variables:
            return "No variables found", False

        lines = []
        for v in variables:
            scope = v.component_name if v.origin is Origin.COMPONENT else "global"
            lines.append(f"  {v.name:<32} {scope}")
        lines.append("")
        lines.append(f"({len(variables)} variable{'s' if len(variables) != 1 else ''})")
        return "\n".join(lines), False

    def cmd_info(self, args: list[str]) -> tuple[str, bool]:
        """Show one variable."""
        if not args:
            return "Usage: /info <name>", False

        name = args[0] if args[0].startswith("--") else "--" + args[0]
        variable = self.workspace.variables.get(name)
        if variable is None:
            return f"Variable not found: {name}", False
        return variable.format_text(), False

    def cmd_imports(self, args: list[str]) -> tuple[str, bool]:
        """Show or set imported components."""
        if args:
            self.document.extra_imports.update(a.strip(",") for a in args if a.strip(","))

        imports = sorted(self.document.imports(self.workspace.library))
        if not imports:
            return "No components imported", False
        return "Imported components: " + ", ".join(imports), False

    def cmd_clear(self, args: list[str]) -> tuple[str, bool]:
        """Forget typed lines and imports."""
        self.document.clear()
        return "Document cleared", False

    def cmd_stats(self, args: list[str]) -> tuple[str, bool]:
        """Show index statistics."""
        stats = self.workspace.get_stats()
        if not stats["active"]:
            return f"Workspace {stats['root']} is not active", False

        lines = [
            "Index Statistics:",
            f"  Root: {stats['root']}",
            f"  Manifest: {stats['manifest']}",
            f"  Variables: {stats['variable_count']}"
            f" ({stats['global_count']} global, {stats['component_count']} component)",
            f"  Components: {', '.join(stats['components']) or '-'}",
            f"  Files: {stats['files_scanned']} scanned, {stats['files_failed']} failed",
            f"  Rebuilds: {stats['rebuild_count']} (last {stats['last_rebuild_ms']} ms)",
        ]
        return "\n".join(lines), False

    def cmd_help(self, args: list[str]) -> tuple[str, bool]:
        """Show help."""
        if args:
            cmd = args[0].lstrip("/")
            if cmd in self.help_text:
                return self.help_text[cmd], False
            return f"Unknown command: /{cmd}", False

        lines = [
            "lutracss - CSS variable completion",
            "",
            "Type CSS or Svelte markup; completions appear after var(--, -- or a",
            "space followed by --. Import lines (import { Button } from 'lutra')",
            "make component variables available.",
            "",
            "Meta Commands:",
        ]

        for cmd in sorted(self.help_text.keys()):
            lines.append(f"  /{cmd} - {self.help_text[cmd]}")

        return "\n".join(lines), False

    def cmd_quit(self, args: list[str]) -> tuple[str, bool]:
        """Exit the REPL."""
        return "Goodbye!", True
