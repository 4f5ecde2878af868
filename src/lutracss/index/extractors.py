# lutracss.index.extractors - Pattern-based variable extraction
"""
Regex extraction rules for CSS custom properties.

Each rule is a pure function from file text to a list of Variables. The
rules are deliberately tolerant: they do not parse CSS or Svelte, and
malformed input simply yields fewer (or less described) variables.
"""
from pathlib import Path
from typing import Optional
import re

from lutracss.index.variable import Origin, Variable


# @property --name { ... }
PROPERTY_PATTERN = re.compile(
    r"@property\s+(?P<name>--[\w-]+)\s*\{(?P<body>[^}]*)\}",
)

# Fields inside an @property body, each optional
SYNTAX_FIELD = re.compile(r"\bsyntax\s*:\s*(?P<quote>['\"])(?P<value>.*?)(?P=quote)")
INHERITS_FIELD = re.compile(r"\binherits\s*:\s*(?P<value>true|false)\b", re.IGNORECASE)
INITIAL_VALUE_FIELD = re.compile(r"\binitial-value\s*:\s*(?P<value>[^;\n]+)")

# --name: value;
# The name must not continue a word, so BEM selectors like .btn--primary:hover
# are not taken for declarations.
DECLARATION_PATTERN = re.compile(
    r"(?<![\w-])(?P<name>--[\w-]+)\s*:\s*(?P<value>[^;{}]+);",
)

# @cssprop --name - description
CSSPROP_PATTERN = re.compile(
    r"@cssprop\s+(?P<name>--[\w-]+)\s*-\s*(?P<description>[^\n]+)",
)

# Comment closers left at the end of a one-line tag, e.g. <!-- @cssprop ... -->
TRAILING_CLOSER = re.compile(r"\s*(?:-->|\*/)\s*$")


def normalize_newlines(text: str) -> str:
    """Normalize Windows and old Mac line endings to LF."""
    if "\r" in text:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text


def clean_comment(raw: str) -> Optional[str]:
    """
    Turn the inside of a ``/* ... */`` block into plain text.

    Doc-block gutters (leading ``*``) are removed and blank edge lines
    dropped. Returns None for an empty comment.
    """
    lines = []
    for line in raw.split("\n"):
        line = line.strip()
        while line.startswith("*"):
            line = line[1:].lstrip()
        lines.append(line)

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()

    text = "\n".join(lines)
    return text or None


def preceding_comment(text: str, position: int) -> Optional[str]:
    """
    Get the comment block immediately before position.

    Only whitespace may separate the comment from position. A selector or
    another declaration in between detaches the comment.

    Returns:
        Cleaned comment text or None
    """
    # Walk back in place, without copying the prefix
    end = position
    while end > 0 and text[end - 1].isspace():
        end -= 1
    if not text.endswith("*/", 0, end):
        return None

    start = text.rfind("/*", 0, end - 2)
    if start == -1:
        return None

    return clean_comment(text[start + 2:end - 2])


def format_property_description(
    comment: Optional[str],
    syntax: Optional[str] = None,
    inherits: Optional[str] = None,
    initial_value: Optional[str] = None,
) -> Optional[str]:
    """
    Build the description for an @property declaration.

    The comment text comes first, followed by a fenced css block with the
    fields that were present.
    """
    fields = []
    if syntax is not None:
        fields.append(f"syntax: '{syntax}'")
    if inherits is not None:
        fields.append(f"inherits: {inherits}")
    if initial_value is not None:
        fields.append(f"initial-value: {initial_value}")

    parts = []
    if comment:
        parts.append(comment)
    if fields:
        parts.append("```css\n" + "\n".join(fields) + "\n```")

    if not parts:
        return None
    return "\n\n".join(parts)


def extract_property_rules(
    text: str,
    source_file: Optional[Path] = None,
) -> list[Variable]:
    """
    Extract formal ``@property`` declarations.

    Args:
        text: Stylesheet source
        source_file: File the text was read from

    Returns:
        Global variables in source order
    """
    text = normalize_newlines(text)
    variables = []

    for match in PROPERTY_PATTERN.finditer(text):
        body = match.group("body")

        syntax = SYNTAX_FIELD.search(body)
        inherits = INHERITS_FIELD.search(body)
        initial_value = INITIAL_VALUE_FIELD.search(body)

        description = format_property_description(
            preceding_comment(text, match.start()),
            syntax=syntax.group("value") if syntax else None,
            inherits=inherits.group("value").lower() if inherits else None,
            initial_value=initial_value.group("value").strip() if initial_value else None,
        )

        variables.append(Variable(
            name=match.group("name"),
            origin=Origin.GLOBAL,
            description=description,
            source_file=source_file,
        ))

    return variables


def extract_declarations(
    text: str,
    source_file: Optional[Path] = None,
) -> list[Variable]:
    """
    Extract plain ``--name: value;`` declarations.

    A comment directly before a declaration becomes its description.
    Declarations inside comments are matched as well.

    Args:
        text: Stylesheet source
        source_file: File the text was read from

    Returns:
        Global variables in source order (names may repeat)
    """
    text = normalize_newlines(text)
    variables = []

    for match in DECLARATION_PATTERN.finditer(text):
        variables.append(Variable(
            name=match.group("name"),
            origin=Origin.GLOBAL,
            description=preceding_comment(text, match.start()),
            source_file=source_file,
        ))

    return variables


def extract_cssprop_tags(
    text: str,
    component_name: str,
    source_file: Optional[Path] = None,
) -> list[Variable]:
    """
    Extract ``@cssprop --name - description`` documentation tags.

    Args:
        text: Component source
        component_name: Owning component, e.g. "Button"
        source_file: File the text was read from

    Returns:
        Component variables in source order
    """
    text = normalize_newlines(text)
    variables = []

    for match in CSSPROP_PATTERN.finditer(text):
        description = TRAILING_CLOSER.sub("", match.group("description")).strip()
        variables.append(Variable(
            name=match.group("name"),
            origin=Origin.COMPONENT,
            description=description or None,
            component_name=component_name,
            source_file=source_file,
        ))

    return variables


def component_name_for(path: Path) -> str:
    """Component name for a file: its base name without extension."""
    return path.stem
