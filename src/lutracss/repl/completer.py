# lutracss.repl.completer - Live CSS variable completion
"""
Provides completion of CSS variables and meta commands in the REPL.
"""
from dataclasses import dataclass, field
from typing import Iterable
import re

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from lutracss.completion.imports import find_imported_components


# Partially typed variable name at the cursor: "--" plus name characters
NAME_FRAGMENT = re.compile(r"--(?P<typed>[\w-]*)$")


@dataclass
class ReplDocument:
    """
    The document being edited in the REPL.

    Lines entered so far stand in for the editor document, so import
    statements typed into the REPL take effect. Extra imports can be set
    with /imports.
    """
    lines: list[str] = field(default_factory=list)
    extra_imports: set[str] = field(default_factory=set)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def append(self, line: str) -> None:
        self.lines.append(line)

    def clear(self) -> None:
        self.lines.clear()
        self.extra_imports.clear()

    def imports(self, library: str, pending: str = "") -> frozenset[str]:
        """Imported components, including the line being typed."""
        text = self.text + "\n" + pending if pending else self.text
        return find_imported_components(text, library) | self.extra_imports


class VariableCompleter(Completer):
    """
    Tab completer for the lutracss REPL.

    Provides completions for:
    - CSS variables after ``var(--``, `` --`` or ``--``
    - Meta commands (/ prefixed)
    """

    def __init__(self, workspace, meta_handler, document: ReplDocument):
        """
        Initialize completer.

        Args:
            workspace: Workspace whose resolver supplies candidates
            meta_handler: Meta command handler
            document: REPL document state
        """
        self.workspace = workspace
        self.meta_handler = meta_handler
        self.document = document

    def get_completions(
        self,
        document: Document,
        complete_event,
    ) -> Iterable[Completion]:
        """
        Get completions for current input.

        Args:
            document: Current prompt document
            complete_event: Completion event

        Yields:
            Completion objects
        """
        text = document.text_before_cursor

        if text.startswith("/"):
            yield from self._complete_meta(text)
            return

        yield from self._complete_variables(text, document.text)

    def _complete_meta(self, text: str) -> Iterable[Completion]:
        """Complete meta commands."""
        prefix = text[1:].lower()
        if " " in prefix:
            return

        for cmd in sorted(self.meta_handler.list_commands()):
            if cmd.startswith(prefix):
                yield Completion(
                    "/" + cmd,
                    start_position=-len(text),
                    display_meta=self.meta_handler.get_help_short(cmd),
                )

    def _complete_variables(self, text: str, line: str) -> Iterable[Completion]:
        """Complete variable names at a trigger point."""
        resolver = self.workspace.resolver
        if resolver is None:
            return

        match = NAME_FRAGMENT.search(text)
        if not match:
            return

        typed = match.group("typed")
        # Ask at the trigger point, as if only "--" had been typed
        trigger_prefix = text[:match.start()] + "--"
        imports = self.document.imports(resolver.library, line)

        for candidate in resolver.complete(trigger_prefix, self.document.text, imports=imports):
            if not candidate.label[2:].startswith(typed):
                continue

            if candidate.insert_text.startswith("--"):
                start_position = -(len(typed) + 2)
            else:
                start_position = -len(typed)

            yield Completion(
                candidate.insert_text,
                start_position=start_position,
                display=candidate.label,
                display_meta=candidate.detail,
            )
