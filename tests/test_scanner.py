"""Tests for sdl_summarizer.scanner"""

import pytest

from sdl_summarizer import scanner
from sdl_summarizer.models import Parameter, TypeKind


class TestBraceDelta:
    def test_counts_every_brace(self):
        assert scanner.brace_delta("{ { }") == 1
        assert scanner.brace_delta("enum Color { RED GREEN BLUE }") == 0
        assert scanner.brace_delta("}}") == -2

    def test_no_braces(self):
        assert scanner.brace_delta("id: ID!") == 0


class TestDescriptionLines:
    @pytest.mark.parametrize("line", ['"""Doc"""', '"""', "# comment", "#"])
    def test_is_description_line(self, line):
        assert scanner.is_description_line(line)

    def test_field_is_not_description(self):
        assert not scanner.is_description_line("id: ID!")

    def test_description_text_strips_markers(self):
        assert scanner.description_text('"""Fetches a widget"""') == "Fetches a widget"
        assert scanner.description_text("# Lists widgets") == "Lists widgets"
        assert scanner.description_text('"""') == ""
        assert scanner.description_text('closing text"""') == "closing text"

    def test_closes_inline_description(self):
        assert scanner.closes_inline_description('"""Doc"""')
        assert not scanner.closes_inline_description('"""')
        assert not scanner.closes_inline_description('"""Doc')
        assert not scanner.closes_inline_description("# Doc")


class TestMatchField:
    def test_simple_field(self):
        m = scanner.match_field("foo: Bar")
        assert m.name == "foo"
        assert m.args is None
        assert m.returns == "Bar"

    def test_field_with_arguments(self):
        m = scanner.match_field("widget(id: ID!, first: Int): [Widget!]!")
        assert m.name == "widget"
        assert m.args == "(id: ID!, first: Int)"
        assert m.returns == "[Widget!]!"

    def test_return_type_stops_at_brace(self):
        m = scanner.match_field("widget: Widget {")
        assert m.returns == "Widget"

    @pytest.mark.parametrize("line", ["}", "{", "@deprecated", "type Query {", ": Foo"])
    def test_non_fields(self, line):
        assert scanner.match_field(line) is None

    def test_non_ascii_identifier_rejected(self):
        assert scanner.match_field("wïdget: Widget") is None


class TestParameters:
    def test_required_and_optional(self):
        params = scanner.parse_parameters("(id: ID!, first: Int)")
        assert params == [
            Parameter(name="id", type="ID", required=True),
            Parameter(name="first", type="Int", required=False),
        ]

    def test_list_types_keep_brackets(self):
        params = scanner.parse_parameters("(ids: [ID!]!)")
        assert params == [Parameter(name="ids", type="[ID]", required=True)]

    def test_empty(self):
        assert scanner.parse_parameters(None) == []
        assert scanner.parse_parameters("()") == []


class TestReturnType:
    def test_removes_non_null_markers(self):
        assert scanner.clean_return_type("[Widget!]!") == "[Widget]"

    def test_strips_trailing_selection(self):
        assert scanner.clean_return_type("Widget { id }") == "Widget"

    def test_removes_commas(self):
        assert scanner.clean_return_type(" Widget, ") == "Widget"


class TestHeaders:
    def test_match_header(self):
        h = scanner.match_header("input WidgetInput {")
        assert h.kind is TypeKind.INPUT
        assert h.name == "WidgetInput"

    def test_malformed_header(self):
        assert scanner.match_header("type {") is None
        assert scanner.match_header("typed Foo") is None

    def test_starts_with_header_keyword(self):
        assert scanner.starts_with_header_keyword("scalar DateTime")
        assert not scanner.starts_with_header_keyword("type: String")

    @pytest.mark.parametrize("line", ["type Query", "type Query {", "type Query{", "type Query implements Node {"])
    def test_root_header(self, line):
        assert scanner.is_root_header(line, "Query")

    @pytest.mark.parametrize("line", ["type QueryRoot {", "type Mutation {", "extend type Query {"])
    def test_not_root_header(self, line):
        assert not scanner.is_root_header(line, "Query")

    def test_toggles_block_string(self):
        assert scanner.toggles_block_string('"""')
        assert scanner.toggles_block_string('closing text"""')
        assert not scanner.toggles_block_string('"""Doc"""')
        assert not scanner.toggles_block_string("type of the thing")

    def test_inline_body(self):
        assert scanner.inline_body("type Query { foo: Bar }") == "foo: Bar"
        assert scanner.inline_body("type Query {") == ""
        assert scanner.inline_body("type Query") == ""


class TestDescriptionBuffer:
    def test_single_line_description(self):
        buf = scanner.DescriptionBuffer()
        buf.add('"""Fetches a widget"""')
        assert not buf.active
        assert buf.pending == "Fetches a widget"
        assert buf.take() == "Fetches a widget"
        assert buf.take() is None

    def test_comment_lines_join_with_spaces(self):
        buf = scanner.DescriptionBuffer()
        buf.add("# first")
        buf.add("# second")
        assert buf.active
        assert buf.take() == "first second"

    def test_block_description(self):
        buf = scanner.DescriptionBuffer()
        buf.add('"""')
        assert buf.in_block
        assert buf.accepts("Any text at all: Even: fields")
        buf.add("First line.")
        buf.add("Second line.")
        buf.add('"""')
        assert not buf.in_block
        assert buf.take() == "First line. Second line."

    def test_blank_clears_settled_description(self):
        buf = scanner.DescriptionBuffer()
        buf.add('"""Doc"""')
        buf.blank()
        assert buf.take() is None

    def test_blank_keeps_active_description(self):
        buf = scanner.DescriptionBuffer()
        buf.add("# still going")
        buf.blank()
        assert buf.take() == "still going"


class TestBlockScanner:
    def test_opens_and_closes(self):
        block = scanner.BlockScanner(closes=lambda line, depth: depth == 0 and "}" in line)
        assert not block.open("type Query {")
        assert block.is_open and block.depth == 1
        assert not block.feed("  foo: Bar")
        assert block.feed("}")
        assert not block.is_open

    def test_closes_on_header_line(self):
        block = scanner.BlockScanner(closes=lambda line, depth: depth == 0 and "}" in line)
        assert block.open("enum Color { RED }")
        assert not block.is_open

    def test_nested_braces(self):
        block = scanner.BlockScanner(closes=lambda line, depth: depth == 0 and "}" in line)
        block.open("type A {")
        assert not block.feed("  b: B {")
        assert not block.feed("  }")
        assert block.depth == 1
        assert block.feed("}")
