"""
Summary: Tests for the in-process CSS and HTML minifier strategies.
Why: Library output and positioned errors must map onto the uniform strategy result.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from bundleminifier.features.minify.adapters import CssMinifier, HtmlMinifier
from bundleminifier.features.minify.adapters.style_markup import (
    CssSettings,
    HtmlSettings,
    minify_css,
    minify_html,
    scan_css_structure,
)
from bundleminifier.shared.bundle import Bundle

CSS_FILE = Path("/out/site.css")


def test_valid_css_is_minified_without_errors() -> None:
    content, errors = minify_css(".a { color: red; }", CSS_FILE, CssSettings())

    assert errors == []
    assert content.strip()
    assert "color:red" in content
    assert " " not in content.strip()


def test_unbalanced_open_brace_reports_position() -> None:
    content, errors = minify_css(".a { color: red;", CSS_FILE, CssSettings())

    assert content == ""
    assert len(errors) == 1
    assert errors[0].file_name == CSS_FILE
    assert (errors[0].line_number, errors[0].column_number) == (1, 3)


def test_stray_closing_brace_reports_its_line() -> None:
    problems = scan_css_structure(".a {\n  color: red;\n}\n}\n")

    assert problems == [("Unexpected '}'", 4, 0)]


def test_unterminated_comment_and_string_are_reported() -> None:
    assert scan_css_structure(".a{}\n/* open") == [("Unterminated comment", 2, 0)]
    assert scan_css_structure('.a{content:"x}\n') == [
        ("Expected '}' to close block", 1, 2),
        ("Unterminated string", 1, 11),
    ]


def test_braces_inside_strings_and_comments_are_ignored() -> None:
    css = '.a::after { content: "{"; } /* } */ .b { background: url(\'x}.png\'); }'

    assert scan_css_structure(css) == []


def test_important_comments_follow_comment_mode(make_bundle: Callable[..., Bundle]) -> None:
    css = "/*! license */ .a { color: red; }"

    kept = CssMinifier().minify(make_bundle("a.css", css), CSS_FILE)
    dropped = CssMinifier().minify(make_bundle("a.css", css, commentMode="none"), CSS_FILE)

    assert kept.content is not None and "license" in kept.content
    assert dropped.content is not None and "license" not in dropped.content


def test_html_comments_and_whitespace_are_removed() -> None:
    html = "<html>\n  <body>\n    <!-- note -->\n    <p>Hello</p>\n  </body>\n</html>"

    content, errors = minify_html(html, HtmlSettings(), Path("/out/index.html"))

    assert errors == []
    assert "<!--" not in content
    assert "<p>Hello</p>" in content
    assert len(content) < len(html)


def test_html_settings_read_bundle_overrides(make_bundle: Callable[..., Bundle]) -> None:
    bundle = make_bundle("index.html", "<p></p>", removeComments=False, collapseWhitespace="false")

    settings = HtmlSettings.from_bundle(bundle)

    assert settings.remove_comments is False
    assert settings.remove_empty_space is False


def test_html_comments_kept_when_requested(make_bundle: Callable[..., Bundle]) -> None:
    bundle = make_bundle("index.html", "<div><!-- keep --><p>a</p></div>", removeComments=False)

    output = HtmlMinifier().minify(bundle, Path("/out/index.html"))

    assert output.content is not None and "<!-- keep -->" in output.content


def test_html_attribute_options(make_bundle: Callable[..., Bundle]) -> None:
    markup = '<input type="text" disabled="">'

    kept = HtmlMinifier().minify(make_bundle("form.html", markup), Path("/out/form.html"))
    reduced = HtmlMinifier().minify(
        make_bundle(
            "form.html",
            markup,
            removeOptionalAttributeQuotes=True,
            reduceBooleanAttributes=True,
        ),
        Path("/out/form.html"),
    )

    assert kept.content == '<input type="text" disabled="">'
    assert reduced.content == "<input type=text disabled>"


def test_html_parse_errors_become_positioned_errors() -> None:
    content, errors = minify_html("<div>\n<p>a</span></div>", HtmlSettings(), Path("/out/index.html"))

    assert content == ""
    assert len(errors) == 1
    assert "span" in errors[0].message
    assert errors[0].line_number == 2
    assert errors[0].file_name == Path("/out/index.html")


def test_html_document_without_doctype_is_accepted() -> None:
    content, errors = minify_html(
        "<html><head><title>t</title></head><body><p>x</p></body></html>",
        HtmlSettings(),
        Path("/out/index.html"),
    )

    assert errors == []
    assert content == "<html><head><title>t</title></head><body><p>x</p></body></html>"


def test_html_doctype_survives_minification() -> None:
    content, errors = minify_html(
        "<!DOCTYPE html>\n<html><head><title>t</title></head><body><p>x</p></body></html>",
        HtmlSettings(),
        Path("/out/index.html"),
    )

    assert errors == []
    assert content == "<!DOCTYPE html><html><head><title>t</title></head><body><p>x</p></body></html>"


def test_html_partials_with_unclosed_elements_are_accepted() -> None:
    unclosed, unclosed_errors = minify_html("<div>hi", HtmlSettings(), Path("/out/part.html"))
    solidus, solidus_errors = minify_html("<div/>", HtmlSettings(), Path("/out/part.html"))

    assert unclosed_errors == []
    assert unclosed == "<div>hi</div>"
    assert solidus_errors == []
    assert solidus == "<div></div>"
