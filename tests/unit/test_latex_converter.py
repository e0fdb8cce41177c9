"""
Unit tests for the LaTeX subset parser.
"""

import pytest

from content_previewer.infrastructure.converter import (
    InlineCommandConverter,
    LatexConverter,
    LatexPreprocessor,
)
from content_previewer.infrastructure.converter.latex_scanner import (
    ScanCursor,
    match_command,
    match_display_math,
    match_environment,
    replace_command,
)


FULL_DOCUMENT = r"""\documentclass{article}
\usepackage{amsmath}
% preamble comment
\begin{document}
Hello \textbf{world} % trailing comment
\begin{equation}\label{eq1} x=1 \end{equation}
\end{document}
trailing junk"""


@pytest.fixture
def converter():
    return LatexConverter()


class TestPreprocessor:
    """Test preamble, postamble and comment stripping."""

    def test_strips_preamble_and_postamble(self):
        result = LatexPreprocessor().preprocess(FULL_DOCUMENT)

        assert "documentclass" not in result
        assert "\\begin{document}" not in result
        assert "\\end{document}" not in result
        assert "trailing junk" not in result
        assert result.startswith("Hello")

    def test_strips_comments(self):
        result = LatexPreprocessor().preprocess("a % one\nb %two\n% whole line\nc")

        assert result == "a \nb \n\nc"

    def test_escaped_percent_is_still_a_comment(self):
        """Backslash-escaped percent signs are not special-cased."""
        result = LatexPreprocessor().preprocess("50\\% off")

        assert result == "50\\"

    def test_is_idempotent(self):
        preprocessor = LatexPreprocessor()
        once = preprocessor.preprocess(FULL_DOCUMENT)

        assert preprocessor.preprocess(once) == once

    def test_fragment_without_document_is_kept(self):
        assert LatexPreprocessor().preprocess("  just text  ") == "just text"

    def test_last_end_document_wins(self):
        text = "\\begin{document}a\\end{document}b\\end{document}c"

        assert LatexPreprocessor().preprocess(text) == "a\\end{document}b"


class TestInlineCommands:
    """Test inline command substitution."""

    def test_all_rules(self):
        result = InlineCommandConverter().convert(
            r"\textbf{a} \textit{b} \text{c} \label{d} \ref{e}"
        )

        assert result == (
            "<strong>a</strong> <em>b</em> c "
            '<span class="latex-label">[label: d]</span> '
            '<span class="latex-ref">[ref: e]</span>'
        )

    def test_nested_braces_are_left_alone(self):
        text = r"\textbf{a{b}}"

        assert InlineCommandConverter().convert(text) == text

    def test_empty_argument_is_left_alone(self):
        text = r"\textbf{}"

        assert InlineCommandConverter().convert(text) == text

    def test_text_does_not_match_textbf(self):
        assert InlineCommandConverter().convert(r"\textbf{x}") == "<strong>x</strong>"

    def test_unterminated_command_is_left_alone(self):
        text = r"\textit{never closed"

        assert InlineCommandConverter().convert(text) == text


class TestScanner:
    """Test the low-level scanning helpers."""

    def test_match_environment(self):
        source = r"\begin{foo}body\end{foo} after"
        block = match_environment(source, 0)

        assert block.name == "foo"
        assert block.body == "body"
        assert block.span == (0, len(r"\begin{foo}body\end{foo}"))

    def test_match_environment_first_end_wins(self):
        source = r"\begin{a}x\begin{a}y\end{a}z\end{a}"
        block = match_environment(source, 0)

        assert block.body == r"x\begin{a}y"

    def test_match_environment_requires_exact_name(self):
        assert match_environment(r"\begin{align}x\end{align*}", 0) is None

    @pytest.mark.parametrize("source", [r"\begin{foo}x", r"\begin{", r"\begin{}x\end{}", r"\begin{foo"])
    def test_match_environment_unterminated(self, source):
        assert match_environment(source, 0) is None

    def test_match_display_math(self):
        span = match_display_math("$$a+b$$ c", 0)

        assert span.content == "a+b"
        assert span.end == 7

    def test_match_display_math_unterminated(self):
        assert match_display_math("$$a+b", 0) is None

    def test_match_command(self):
        assert match_command(r"\label{eq1} rest", 0, "label") == ("eq1", 11)

    def test_replace_command_keeps_malformed(self):
        result = replace_command(r"\ref{} \ref{x}", "ref", lambda arg: arg.upper())

        assert result == r"\ref{} X"

    def test_cursor_only_moves_forward(self):
        cursor = ScanCursor("abcdef", 3)
        cursor.move_to(1)

        assert cursor.pos == 3

        cursor.advance(10)

        assert cursor.at_end


class TestLatexConverter:
    """Test the main scan and environment dispatch."""

    def test_plain_text_is_one_paragraph(self, converter):
        assert converter.parse("  Hello \\textbf{world}  ") == "<p>Hello <strong>world</strong></p>"

    def test_convert_wraps_document(self, converter):
        result = converter.convert("Hi")

        assert result == '<div class="latex-document tex2jax_process"><p>Hi</p></div>'

    def test_empty_input(self, converter):
        assert converter.parse("") == ""
        assert converter.parse("   \n  ") == ""

    def test_equation_label_moved_to_front(self, converter):
        result = converter.parse(r"\begin{equation}\label{eq1} x=1 \end{equation}")

        assert result == (
            '<div class="math-display">'
            r"\begin{equation}\label{eq1} x=1 \end{equation}"
            "</div>"
        )
        assert result.count("x=1") == 1

    def test_equation_label_after_body(self, converter):
        result = converter.parse(r"\begin{equation} y=2 \label{eq:y}\end{equation}")

        assert r"\begin{equation}\label{eq:y} y=2 \end{equation}" in result

    def test_equation_without_label(self, converter):
        result = converter.parse(r"\begin{equation}E=mc^2\end{equation}")

        assert r"\begin{equation} E=mc^2 \end{equation}" in result

    def test_itemize_two_items(self, converter):
        result = converter.parse(r"\begin{itemize}\item a\item b\end{itemize}")

        assert result == '<ul class="latex-itemize"><li>a</li><li>b</li></ul>'

    def test_enumerate_items_get_inline_commands(self, converter):
        result = converter.parse("\\begin{enumerate}\n\\item \\textbf{x}\n\\item y\n\\end{enumerate}")

        assert result == (
            '<ol class="latex-enumerate"><li><strong>x</strong></li><li>y</li></ol>'
        )

    @pytest.mark.parametrize("name", ["align", "align*", "gather", "multline*", "eqnarray"])
    def test_math_environments_kept_verbatim(self, converter, name):
        body = r"a &= b \\ c &= d"
        result = converter.parse(f"\\begin{{{name}}}{body}\\end{{{name}}}")

        assert result == f'<div class="math-display">\\begin{{{name}}}{body}\\end{{{name}}}</div>'

    def test_unknown_environment_is_visible(self, converter):
        result = converter.parse(r"\begin{theorem}Every \textit{x} holds\end{theorem}")

        assert 'class="latex-environment"' in result
        assert r"\begin{theorem}" in result
        assert r"\end{theorem}" in result
        assert "Every <em>x</em> holds" in result

    def test_display_math_preserved(self, converter):
        result = converter.parse("before $$\\frac{a}{b}$$ after")

        assert result == (
            "<p>before</p>"
            '<div class="math-display">$$\\frac{a}{b}$$</div>'
            "<p>after</p>"
        )

    def test_inline_math_stays_in_paragraph(self, converter):
        assert converter.parse("Inline $E = mc^2$ here") == "<p>Inline $E = mc^2$ here</p>"

    def test_text_around_environment(self, converter):
        result = converter.parse(r"Intro \begin{itemize}\item a\end{itemize} outro")

        assert result == (
            '<p>Intro</p><ul class="latex-itemize"><li>a</li></ul><p>outro</p>'
        )

    def test_unterminated_equation_is_plain_text(self, converter):
        result = converter.parse(r"\begin{equation} x=1")

        assert result == r"<p>\begin{equation} x=1</p>"

    def test_unterminated_display_math_is_plain_text(self, converter):
        assert converter.parse("$$ x") == "<p>$$ x</p>"

    @pytest.mark.parametrize("source", [
        r"\begin{",
        r"\begin{}",
        r"\begin{a",
        "$$",
        "$$$",
        r"\begin{a}\begin{b}\begin{c}",
        r"$$\begin{x}$$",
        r"text \begin{equation} and $$ more \begin{itemize}",
    ])
    def test_adversarial_inputs_terminate(self, converter, source):
        result = converter.parse(source)

        assert isinstance(result, str)
        assert result

    def test_full_document_matches_stripped(self, converter):
        stripped = LatexPreprocessor().preprocess(FULL_DOCUMENT)

        assert converter.parse(FULL_DOCUMENT) == converter.parse(stripped)

    def test_full_document(self, converter):
        result = converter.parse(FULL_DOCUMENT)

        assert result.startswith("<p>Hello <strong>world</strong></p>")
        assert r"\begin{equation}\label{eq1} x=1 \end{equation}" in result
        assert "trailing" not in result
