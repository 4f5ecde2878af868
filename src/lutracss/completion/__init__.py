# lutracss.completion - Completion resolution module
from lutracss.completion.resolver import Candidate, CompletionResolver, filter_variables
from lutracss.completion.triggers import Trigger, detect_trigger, insert_text
from lutracss.completion.imports import find_imported_components

__all__ = [
    "Candidate",
    "CompletionResolver",
    "filter_variables",
    "Trigger",
    "detect_trigger",
    "insert_text",
    "find_imported_components",
]
