# lutracss.repl - REPL interface module
from lutracss.repl.repl import Repl
from lutracss.repl.completer import ReplDocument, VariableCompleter
from lutracss.repl.commands import MetaCommandHandler

__all__ = [
    "Repl",
    "ReplDocument",
    "VariableCompleter",
    "MetaCommandHandler",
]
