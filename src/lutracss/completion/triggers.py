# lutracss.completion.triggers - Completion trigger detection
"""
Decides from the text before the cursor whether variable completions apply.
"""
from enum import Enum
from typing import Optional
import re


class Trigger(Enum):
    """How completion was triggered."""
    VAR = "var"  # var(-- inside a CSS value
    ATTRIBUTE = "attribute"  # whitespace then --, e.g. a component attribute
    DIRECT = "direct"  # bare -- at the cursor


VAR_TRIGGER = re.compile(r"var\(\s*--$")
ATTRIBUTE_TRIGGER = re.compile(r"\s--$")


def detect_trigger(line_prefix: str) -> Optional[Trigger]:
    """
    Detect the trigger at the end of a line prefix.

    The attribute check is a coarse heuristic: any whitespace before the
    dashes counts, whether or not the cursor is really inside a tag.

    Args:
        line_prefix: Current line up to the cursor column

    Returns:
        Trigger or None when no completions apply
    """
    if VAR_TRIGGER.search(line_prefix):
        return Trigger.VAR
    if ATTRIBUTE_TRIGGER.search(line_prefix):
        return Trigger.ATTRIBUTE
    if line_prefix.endswith("--"):
        return Trigger.DIRECT
    return None


def insert_text(name: str, trigger: Trigger) -> str:
    """
    Text to insert for a variable name.

    The typed ``--`` is kept in the document for var() and attribute
    triggers, and var() gets its closing parenthesis.
    """
    if trigger is Trigger.VAR:
        return f"{name[2:]})"
    if trigger is Trigger.ATTRIBUTE:
        return name[2:]
    return name
