"""
End-to-end compilation tests

Tests the full pipeline: LPML source → Compiler → HTML, and the command
line front end reading and writing real files.
"""

import pytest

from lpml.__main__ import html_compile, main
from lpml.models import ProgramState
from lpml.config import AppSettings, appsettings
from lpml.lib.compiler import Compiler, compile_source
from lpml.lib.generator import Generator
from lpml.lib.highlight import LpmlLexer, code_highlight
from lpml.lib.parser import Parser

from pygments.token import Name, Keyword, String


PAGE = """
[top-of-page-start]
  [h-start] label = "site" contains = "Lazy Pages" level = 1 text_color = "navy" [h-end]
[top-of-page-end]

[mid-page-start]
  [divide-start] class = "card" padding = "large" rounded = "medium" shadow = "small"
    [p-start] contains = "Welcome to $site" format_with = ["italic"] [p-end]
    [p-start] contains = $site [p-end]
    [lst-unord] items = ["one", 2, $site] [lst-end]
  [divide-end]
[mid-page-end]

[bottom-of-page-start]
  [link-start] link_url = "https://example.com" contains = "Home" [link-end]
[bottom-of-page-end]
"""


class TestCompiler:
    """Compiler facade"""

    def test_compile_success(self):
        result = Compiler(PAGE).compile()

        assert result.status is True
        assert result.errors == []
        assert result.section_count == 3
        assert result.html.startswith("<!DOCTYPE html>\n")
        assert '<h1 id="site" style="color: navy;">Lazy Pages</h1>' in result.html
        assert (
            '<div class="card" style="padding: 24px; border-radius: 8px; '
            'box-shadow: 0 1px 3px rgba(0,0,0,0.12), 0 1px 2px rgba(0,0,0,0.24);">'
        ) in result.html
        # references are not expanded inside string literals
        assert "<p><em>Welcome to $site</em></p>" in result.html
        assert "<p>Lazy Pages</p>" in result.html
        assert "<li>Lazy Pages</li>" in result.html
        assert '<a href="https://example.com">Home</a>' in result.html

    def test_compile_with_errors_skips_generation(self):
        result = compile_source("[top-of-page-start] [p-start] contains = \"x\" [p-end]")

        assert result.status is False
        assert result.html == ""
        assert len(result.errors) == 1
        assert "top" in result.errors[0]
        # the partial tree is still available
        assert len(result.document.sections[0].children) == 1

    def test_compiler_matches_manual_pipeline(self):
        manual = Generator().generate(Parser(PAGE).parse())
        assert compile_source(PAGE).html == manual


class TestSettings:
    """pydantic-settings configuration"""

    def test_defaults(self):
        settings = AppSettings()
        assert settings.source_suffix == ".lpml"
        assert settings.document_title == "LPML Document"
        assert settings.highlight_code is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("LPML_DOCUMENT_TITLE", "My Page")
        monkeypatch.setenv("LPML_INDENT_WIDTH", "4")
        settings = AppSettings()
        assert settings.document_title == "My Page"
        assert settings.indent_width == 4

    def test_output_path_derivation(self, tmp_path):
        settings = AppSettings()
        assert settings.outputPath_derive(tmp_path / "site.lpml") == tmp_path / "site.html"
        assert settings.sourceSuffix_check(tmp_path / "site.lpml")
        assert not settings.sourceSuffix_check(tmp_path / "site.txt")

    def test_generator_uses_configured_title_and_indent(self, monkeypatch):
        monkeypatch.setattr(appsettings, "document_title", "Custom")
        monkeypatch.setattr(appsettings, "indent_width", 4)
        html = compile_source('[mid-page-start][p-start] contains = "x" [p-end][mid-page-end]').html
        assert "  <title>Custom</title>\n" in html
        assert '    <div class="mid-page">\n        <p>x</p>\n    </div>\n' in html


class TestHighlighting:
    """Optional Pygments rendering of code blocks"""

    def test_highlighting_off_by_default(self):
        html = compile_source(
            '[mid-page-start][code-start] file_type = "python" syntax = { x = 1 } [code-end][mid-page-end]'
        ).html
        assert '<pre><code class="language-python">x = 1</code></pre>' in html

    def test_highlighting_enabled(self, monkeypatch):
        monkeypatch.setattr(appsettings, "highlight_code", True)
        html = compile_source(
            '[mid-page-start][code-start] file_type = "python" syntax = { def f(): pass } [code-end][mid-page-end]'
        ).html
        assert '<pre><code class="language-python">' in html
        assert "<span" in html
        assert "</code></pre>" in html

    def test_unknown_language_falls_back_to_escaping(self, monkeypatch):
        monkeypatch.setattr(appsettings, "highlight_code", True)
        html = compile_source(
            '[mid-page-start][code-start] file_type = "zzz-unknown" syntax = { a < b } [code-end][mid-page-end]'
        ).html
        assert '<pre><code class="language-zzz-unknown">a &lt; b</code></pre>' in html

    def test_code_highlight_unknown_language(self):
        assert code_highlight("x", "zzz-unknown") is None

    def test_lpml_lexer_tokens(self):
        tokens = list(LpmlLexer().get_tokens('[mid-page-start] [p-start] contains = "x" [p-end]'))
        assert (Keyword.Declaration, "mid-page-start") in tokens
        assert (Name.Tag, "p-start") in tokens
        assert (Name.Attribute, "contains") in tokens
        assert (String, '"x"') in tokens

    def test_lpml_code_block_highlighted(self):
        highlighted = code_highlight('[p-start] contains = "x" [p-end]', "lpml")
        assert highlighted is not None
        assert "p-start" in highlighted


class TestCommandLine:
    """lpml <input.lpml> [output.html]"""

    def test_default_output_path(self, tmp_path, capsys):
        source = tmp_path / "page.lpml"
        source.write_text(PAGE, encoding="utf-8")

        assert main([str(source)]) == 0

        output = tmp_path / "page.html"
        assert output.exists()
        assert output.read_text(encoding="utf-8") == compile_source(PAGE).html
        assert f"Successfully generated: {output}" in capsys.readouterr().out

    def test_explicit_output_path(self, tmp_path):
        source = tmp_path / "page.lpml"
        source.write_text(PAGE, encoding="utf-8")
        target = tmp_path / "out.html"

        main([str(source), str(target)])

        assert target.exists()
        assert not (tmp_path / "page.html").exists()

    def test_wrong_suffix_rejected(self, tmp_path, capsys):
        source = tmp_path / "page.txt"
        source.write_text(PAGE, encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            main([str(source)])

        assert excinfo.value.code == 1
        assert ".lpml" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "absent.lpml")])

        assert excinfo.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_parse_errors_reported_and_no_output(self, tmp_path, capsys):
        source = tmp_path / "broken.lpml"
        source.write_text(
            "[mid-page-start]\n[p-start] contains \"x\" [p-end]\n[h-start] level = [h-end]\n",
            encoding="utf-8",
        )

        with pytest.raises(SystemExit) as excinfo:
            main([str(source)])

        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert "Parsing errors:" in err
        assert "  - expected '=' after property name contains" in err
        assert "  - expected value for property level" in err
        assert "  - expected closing tag for section mid" in err
        assert not (tmp_path / "broken.html").exists()

    def test_compile_stage_uses_compiler_result(self):
        state = html_compile(ProgramState(sourceText=PAGE))

        assert state.compileResult.status is True
        assert state.compileResult.section_count == 3
        assert state.htmlText == state.compileResult.html == compile_source(PAGE).html

    def test_compile_stage_exits_on_parse_errors(self, capsys):
        state = ProgramState(sourceText='[mid-page-start][p-start] contains "x" [p-end][mid-page-end]')

        with pytest.raises(SystemExit) as excinfo:
            html_compile(state)

        assert excinfo.value.code == 1
        assert state.compileResult is None
        assert "  - expected '=' after property name contains" in capsys.readouterr().err
