# lutracss.repl.repl - Main REPL implementation
"""
Interactive REPL that completes CSS variables as you type.
"""
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.styles import Style

from lutracss.repl.completer import ReplDocument, VariableCompleter
from lutracss.repl.commands import MetaCommandHandler
from lutracss.version import __version__


class Repl:
    """
    Interactive REPL for trying CSS variable completion.

    Features:
    - Live completion of indexed variables
    - Command history
    - Meta commands (/ prefixed)
    """

    # REPL prompt style
    STYLE = Style.from_dict({
        "prompt": "bold cyan",
        "rprompt": "gray",
    })

    def __init__(self, workspace, history_file: Optional[Path] = None):
        """
        Initialize REPL.

        Args:
            workspace: Activated workspace
            history_file: History file path
        """
        self.workspace = workspace
        self.document = ReplDocument()

        self.meta_handler = MetaCommandHandler(self.workspace, self.document)
        self.completer = VariableCompleter(self.workspace, self.meta_handler, self.document)

        # Setup history
        if history_file is None:
            history_file = Path.home() / ".lutracss_history"
        self.history = FileHistory(str(history_file))

        # Create prompt session
        self.session: Optional[PromptSession] = None

    def _create_session(self) -> PromptSession:
        """Create prompt session."""
        return PromptSession(
            history=self.history,
            auto_suggest=AutoSuggestFromHistory(),
            completer=self.completer,
            style=self.STYLE,
            complete_while_typing=True,
        )

    def run(self) -> None:
        """Run the REPL."""
        self.session = self._create_session()

        print(self._get_banner())

        while True:
            try:
                line = self.session.prompt(
                    [("class:prompt", "css> ")],
                    rprompt=self._get_rprompt(),
                )

                if not line or not line.strip():
                    continue

                should_exit = self.execute_line(line.rstrip())
                if should_exit:
                    break

            except KeyboardInterrupt:
                print("\nUse /quit to exit")
                continue

            except EOFError:
                print("\nGoodbye!")
                break

    def execute_line(self, line: str) -> bool:
        """
        Execute a line of input.

        Args:
            line: Input line

        Returns:
            True if REPL should exit
        """
        if line.startswith("/"):
            return self._execute_meta(line)

        first_word = line.split()[0].lower() if line.split() else ""
        if first_word in ("help", "quit", "exit", "q"):
            return self._execute_meta("/" + line)

        # Anything else is document text
        self.document.append(line)
        return False

    def _execute_meta(self, line: str) -> bool:
        """Execute meta command."""
        parts = line[1:].split(None, 1)
        command = parts[0] if parts else ""
        args = parts[1].split() if len(parts) > 1 else []

        output, should_exit = self.meta_handler.execute(command, args)
        if output:
            print(output)

        return should_exit

    def _get_banner(self) -> str:
        """Get welcome banner."""
        return f"""
lutracss v{__version__} - CSS variable completion
Workspace: {self.workspace.root}
Type /help for commands, /quit to exit
"""

    def _get_rprompt(self) -> str:
        """Get right prompt (variable count)."""
        count = len(self.workspace.variables)
        if count == 0:
            return ""
        return f"[{count} variable{'s' if count != 1 else ''}]"
