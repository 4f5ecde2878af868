# tests/test_completion.py - Completion resolver tests
"""
Tests for trigger detection, import resolution, filtering and formatting.
"""
from pathlib import Path

import pytest

from lutracss.completion import (
    CompletionResolver,
    Trigger,
    detect_trigger,
    filter_variables,
    find_imported_components,
    insert_text,
)
from lutracss.index import Origin, Variable


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PAGE_SVELTE = FIXTURES_DIR / "Page.svelte"


class StaticIndex:
    """Minimal index stand-in exposing a fixed snapshot."""

    def __init__(self, variables):
        self.variables = {v.name: v for v in variables}


BRAND = Variable(
    name="--brand",
    origin=Origin.GLOBAL,
    description="Brand color",
    source_file=Path("src/app.css"),
)
RADIUS = Variable(name="--radius", origin=Origin.GLOBAL, source_file=Path("src/app.css"))
BTN_SIZE = Variable(
    name="--btn-size",
    origin=Origin.COMPONENT,
    description="Controls button size",
    component_name="Button",
    source_file=Path("Button.svelte"),
)
CARD_PADDING = Variable(
    name="--card-padding",
    origin=Origin.COMPONENT,
    description="Inner spacing of the card",
    component_name="Card",
    source_file=Path("Card.svelte"),
)
ALL = [BRAND, RADIUS, BTN_SIZE, CARD_PADDING]


@pytest.fixture
def resolver():
    return CompletionResolver(StaticIndex(ALL))


class TestTriggers:
    """Tests for trigger detection."""

    @pytest.mark.parametrize("prefix,expected", [
        ("color: var(--", Trigger.VAR),
        ("color: var( --", Trigger.VAR),
        ("--", Trigger.DIRECT),
        ("  --", Trigger.ATTRIBUTE),
        ('<Button --', Trigger.ATTRIBUTE),
        ("\t--", Trigger.ATTRIBUTE),
        ("margin: 1px", None),
        ("color: var(-", None),
        ("", None),
        ("-", None),
    ])
    def test_detect_trigger(self, prefix, expected):
        """Test each trigger pattern."""
        assert detect_trigger(prefix) is expected

    def test_insertion_text_law(self):
        """Test the text inserted for each trigger."""
        assert insert_text("--foo-bar", Trigger.VAR) == "foo-bar)"
        assert insert_text("--foo-bar", Trigger.ATTRIBUTE) == "foo-bar"
        assert insert_text("--foo-bar", Trigger.DIRECT) == "--foo-bar"


class TestImports:
    """Tests for import resolution."""

    def test_named_imports(self):
        """Test a single import statement."""
        text = "import { Button, Card } from 'lutra';"
        assert find_imported_components(text) == {"Button", "Card"}

    def test_aliases_and_quotes(self):
        """Test aliased imports and double quotes."""
        text = 'import {\n  Button,\n  Card as Panel,\n} from "lutra"'
        assert find_imported_components(text) == {"Button", "Card"}

    def test_multiple_statements_and_subpath(self):
        """Test every statement from the library counts."""
        text = (
            "import { Button } from 'lutra';\n"
            "import { Tabs } from 'lutra/components';\n"
            "import { onMount } from 'svelte';\n"
            "import { Card } from 'lutra-extra';\n"
        )
        assert find_imported_components(text) == {"Button", "Tabs"}

    def test_other_library(self):
        """Test the library name is configurable."""
        text = "import { Dialog } from 'acme-ui';"
        assert find_imported_components(text, "acme-ui") == {"Dialog"}
        assert find_imported_components(text) == frozenset()

    def test_fixture_page(self):
        """Test a Svelte page."""
        assert find_imported_components(PAGE_SVELTE.read_text()) == {"Button", "Card"}


class TestFiltering:
    """Tests for visibility filtering."""

    @pytest.mark.parametrize("imports", [
        set(),
        {"Button"},
        {"Card"},
        {"Button", "Card"},
        {"Unknown"},
    ])
    def test_filtering_law(self, imports):
        """Test eligible = globals plus variables of imported components."""
        eligible = set(filter_variables(ALL, imports))
        expected = {v for v in ALL if v.origin is Origin.GLOBAL} | {
            v for v in ALL
            if v.origin is Origin.COMPONENT and v.component_name in imports
        }
        assert eligible == expected


class TestResolver:
    """Tests for the CompletionResolver class."""

    def test_no_trigger(self, resolver):
        """Test no completions without a trigger."""
        assert resolver.complete("margin: 1px", "") == []

    def test_var_trigger(self, resolver):
        """Test var() completions close the call."""
        candidates = resolver.complete("color: var(--", "")
        assert [c.label for c in candidates] == ["--brand", "--radius"]
        assert candidates[0].insert_text == "brand)"

    def test_direct_trigger(self, resolver):
        """Test direct completions insert the full name."""
        candidates = resolver.complete("--", "")
        assert {c.insert_text for c in candidates} == {"--brand", "--radius"}

    def test_attribute_trigger_with_import(self, resolver):
        """Test component variables appear once imported."""
        document = "import { Button } from 'lutra';\n<Button --"
        candidates = resolver.complete("<Button --", document)

        labels = [c.label for c in candidates]
        assert labels == ["--brand", "--btn-size", "--radius"]
        btn = candidates[1]
        assert btn.insert_text == "btn-size"

    def test_component_hidden_without_import(self, resolver):
        """Test component variables need their component imported."""
        candidates = resolver.complete("<Button --", "<Button --")
        assert "--btn-size" not in [c.label for c in candidates]

    def test_explicit_imports(self, resolver):
        """Test imports can be passed in directly."""
        candidates = resolver.complete("  --", "", imports={"Card"})
        assert "--card-padding" in [c.label for c in candidates]

    def test_formatting_global(self, resolver):
        """Test detail and documentation for a global variable."""
        brand = resolver.complete("--", "")[0]
        assert brand.label == "--brand"
        assert brand.kind == "variable"
        assert brand.detail == "Global CSS Variable (src/app.css)"
        assert brand.documentation == "Brand color\n\nSource: src/app.css"

    def test_formatting_component(self, resolver):
        """Test detail and documentation for a component variable."""
        [btn] = [
            c for c in resolver.complete("--", "", imports={"Button"})
            if c.label == "--btn-size"
        ]
        assert btn.detail == "CSS Property for Button (Button.svelte)"
        assert btn.documentation == "Controls button size\n\nSource: Button.svelte"

    def test_formatting_without_description(self, resolver):
        """Test documentation is just the attribution line."""
        [radius] = [c for c in resolver.complete("--", "") if c.label == "--radius"]
        assert radius.documentation == "Source: src/app.css"

    def test_provide_completions_position(self, resolver):
        """Test the cursor position selects the line prefix."""
        document = "a {\n  color: var(--);\n}\n"
        candidates = resolver.provide_completions(document, 1, len("  color: var(--"))
        assert [c.insert_text for c in candidates] == ["brand)", "radius)"]

    def test_provide_completions_counts_editor_line_breaks(self, resolver):
        """Test form feeds and U+2028 do not start new lines."""
        document = "/* page\x0cbreak */\na {\n  color: var(--\n}\n"
        candidates = resolver.provide_completions(document, 2, 15)
        assert [c.insert_text for c in candidates] == ["brand)", "radius)"]

        document = "const s = 'a\u2028b';\n  --\n"
        candidates = resolver.provide_completions(document, 1, 4)
        assert [c.insert_text for c in candidates] == ["brand", "radius"]

    def test_provide_completions_crlf(self, resolver):
        """Test CRLF and CR line endings."""
        assert len(resolver.provide_completions("a {\r\n--\r}", 1, 2)) == 2
        assert len(resolver.provide_completions("a {\r--", 1, 2)) == 2

    def test_provide_completions_out_of_range(self, resolver):
        """Test positions outside the document give nothing."""
        assert resolver.provide_completions("--", 5, 2) == []
        assert resolver.provide_completions("--", -1, 2) == []
        assert resolver.provide_completions("--", 0, -1) == []

    def test_provide_completions_clamps_column(self, resolver):
        """Test a column past the line end uses the whole line."""
        assert len(resolver.provide_completions("--", 0, 99)) == 2

    def test_does_not_mutate_index(self, resolver):
        """Test a request leaves the snapshot untouched."""
        before = dict(resolver.index.variables)
        resolver.complete("--", "import { Button } from 'lutra'")
        assert resolver.index.variables == before

    def test_to_dict(self, resolver):
        """Test candidate serialization."""
        data = resolver.complete("var(--", "")[0].to_dict()
        assert data == {
            "label": "--brand",
            "kind": "variable",
            "detail": "Global CSS Variable (src/app.css)",
            "documentation": "Brand color\n\nSource: src/app.css",
            "insert_text": "brand)",
        }
