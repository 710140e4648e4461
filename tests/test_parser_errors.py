"""
Parser error recovery tests

The parser never raises: it records messages, keeps going and returns a
best-effort tree.
"""

from lpml.lib.parser import Parser
from lpml.models.ast import ElementKind


def parse(source):
    parser = Parser(source)
    document = parser.parse()
    return document, parser.errors


class TestMissingClosingTags:
    """Unclosed sections and elements"""

    def test_unclosed_section_reports_kind_and_keeps_children(self):
        document, errors = parse('[top-of-page-start]\n[p-start] contains = "kept" [p-end]\n')
        assert len(errors) == 1
        assert "top" in errors[0]
        section = document.sections[0]
        assert len(section.children) == 1
        assert section.children[0].properties["contains"].value == "kept"

    def test_unclosed_element_reports_tag_and_line(self):
        document, errors = parse('[mid-page-start]\n\n[p-start] contains = "x"\n[mid-page-end]')
        # the element swallows the section closer, so both are reported
        assert len(errors) == 2
        assert errors[0] == "expected closing tag for element p at line 3"
        assert "section mid" in errors[1]
        assert document.sections[0].children[0].properties["contains"].value == "x"

    def test_mismatched_closer_is_skipped_inside_element(self):
        document, errors = parse("[mid-page-start][p-start][h-end][p-end][mid-page-end]")
        assert errors == []
        assert document.sections[0].children[0].kind is ElementKind.P

    def test_well_formed_document_has_no_errors(self):
        source = (
            "[top-of-page-start]\n"
            "  [divide-start] [h-start] contains = \"A\" [h-end] [divide-end]\n"
            "[top-of-page-end]\n"
            "[bottom-of-page-start]\n"
            "  [table-start] [row-start] [cell-start] contains = 1 [cell-end] [row-end] [table-end]\n"
            "[bottom-of-page-end]\n"
        )
        _, errors = parse(source)
        assert errors == []


class TestPropertyErrors:
    """Malformed property assignments"""

    def test_missing_equals(self):
        document, errors = parse('[mid-page-start][p-start] contains "x" [p-end][mid-page-end]')
        assert len(errors) == 1
        assert "expected '=' after property name contains" in errors[0]
        assert "STRING" in errors[0]
        assert document.sections[0].children[0].properties == {}

    def test_missing_equals_resumes_at_unexpected_token(self):
        """The token after the bad name is re-examined, here as a new property"""
        document, errors = parse('[mid-page-start][p-start] stray color = "red" [p-end][mid-page-end]')
        assert len(errors) == 1
        assert "stray" in errors[0]
        element = document.sections[0].children[0]
        assert element.properties["color"].value == "red"

    def test_missing_value(self):
        document, errors = parse("[mid-page-start][p-start] contains = [p-end][mid-page-end]")
        assert len(errors) == 1
        assert errors[0].startswith("expected value for property contains")
        assert "P_END" in errors[0]
        assert document.sections[0].children[0].properties == {}

    def test_unknown_tag_inside_element(self):
        """An unrecognised tag reads as a property name without '='"""
        document, errors = parse("[mid-page-start][p-start][fancy-widget][p-end][mid-page-end]")
        assert len(errors) == 1
        assert "fancy-widget" in errors[0]

    def test_illegal_character_as_value(self):
        _, errors = parse("[mid-page-start][p-start] contains = @ [p-end][mid-page-end]")
        assert len(errors) == 1
        assert "ILLEGAL" in errors[0]

    def test_errors_accumulate(self):
        source = (
            "[mid-page-start]\n"
            "[p-start] a \"1\" [p-end]\n"
            "[p-start] b = [p-end]\n"
            "[h-start] c \"3\" [h-end]\n"
            "[mid-page-end]"
        )
        document, errors = parse(source)
        assert len(errors) == 3
        assert len(document.sections[0].children) == 3
