"""Summary: In-process CSS and HTML minifier strategies backed by rcssmin and html5lib.
Why: Translate library output into the uniform strategy result with positioned errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import html5lib
import rcssmin
from html5lib.constants import E as PARSE_ERROR_MESSAGES
from html5lib.serializer import HTMLSerializer

from bundleminifier.shared.bundle import Bundle

from ..domain.results import MinificationError
from ..usecases.ports import MinifierOutput


@dataclass(frozen=True, slots=True)
class CssSettings:
    keep_bang_comments: bool = True

    @classmethod
    def from_bundle(cls, bundle: Bundle) -> "CssSettings":
        comment_mode = str(bundle.option("commentMode", "important")).strip().lower()
        # rcssmin can only keep /*! */ comments, so "all" degrades to "important".
        return cls(keep_bang_comments=comment_mode != "none")


@dataclass(frozen=True, slots=True)
class HtmlSettings:
    remove_comments: bool = True
    remove_empty_space: bool = True
    remove_optional_attribute_quotes: bool = False
    reduce_boolean_attributes: bool = False
    remove_optional_tags: bool = False

    @classmethod
    def from_bundle(cls, bundle: Bundle) -> "HtmlSettings":
        return cls(
            remove_comments=bundle.flag("removeComments", True),
            remove_empty_space=bundle.flag("collapseWhitespace", True),
            remove_optional_attribute_quotes=bundle.flag("removeOptionalAttributeQuotes", False),
            reduce_boolean_attributes=bundle.flag("reduceBooleanAttributes", False),
            remove_optional_tags=bundle.flag("removeOptionalTags", False),
        )


def _advance(line: int, column: int, segment: str) -> tuple[int, int]:
    newlines = segment.count("\n")
    if not newlines:
        return line, column + len(segment)
    return line + newlines, len(segment) - segment.rfind("\n") - 1


def scan_css_structure(text: str) -> list[tuple[str, int, int]]:
    """Find unbalanced braces and unterminated comments or strings.

    Returns ``(message, line, column)`` tuples with 1-based lines and 0-based
    columns, ordered by position.
    """

    problems: list[tuple[str, int, int]] = []
    open_braces: list[tuple[int, int]] = []
    line, column = 1, 0
    index, length = 0, len(text)

    while index < length:
        char = text[index]

        if char == "/" and text.startswith("*", index + 1):
            end = text.find("*/", index + 2)
            if end == -1:
                problems.append(("Unterminated comment", line, column))
                end_index = length
            else:
                end_index = end + 2
            line, column = _advance(line, column, text[index:end_index])
            index = end_index
            continue

        if char in "\"'":
            cursor = index + 1
            while cursor < length and text[cursor] not in (char, "\n"):
                cursor += 2 if text[cursor] == "\\" else 1
            if cursor < length and text[cursor] == char:
                end_index = cursor + 1
            else:
                problems.append(("Unterminated string", line, column))
                end_index = min(cursor, length)
            line, column = _advance(line, column, text[index:end_index])
            index = end_index
            continue

        if char == "{":
            open_braces.append((line, column))
        elif char == "}":
            if open_braces:
                _ = open_braces.pop()
            else:
                problems.append(("Unexpected '}'", line, column))

        if char == "\n":
            line, column = line + 1, 0
        else:
            column += 1
        index += 1

    problems.extend(
        ("Expected '}' to close block", brace_line, brace_column)
        for brace_line, brace_column in open_braces
    )
    return sorted(problems, key=lambda problem: (problem[1], problem[2]))


def minify_css(
    text: str, file_name: Path, options: CssSettings
) -> tuple[str, list[MinificationError]]:
    """Minify stylesheet ``text``; errors are reported instead of raised."""

    errors = [
        MinificationError(file_name, message, line, column)
        for message, line, column in scan_css_structure(text)
    ]
    if errors:
        return "", errors

    minified = rcssmin.cssmin(text, keep_bang_comments=options.keep_bang_comments)
    return minified, []


# Parse errors tolerated in partials and pages without a doctype.
_TOLERATED_ERRORS = frozenset(
    {
        "expected-doctype-but-got-start-tag",
        "expected-doctype-but-got-chars",
        "expected-doctype-but-got-eof",
        "unknown-doctype",
        "expected-closing-tag-but-got-eof",
        "non-void-element-with-trailing-solidus",
    }
)


def _is_document(text: str) -> bool:
    return text.lstrip().lower().startswith(("<!doctype", "<html"))


def _describe_parse_error(code: str, datavars: dict[str, object]) -> str:
    template = PARSE_ERROR_MESSAGES.get(code, code)
    try:
        return template % datavars
    except (KeyError, TypeError, ValueError):
        return template


def minify_html(
    text: str, options: HtmlSettings, file_name: Path
) -> tuple[str, list[MinificationError]]:
    """Minify markup ``text``; parse errors are reported at their source position.

    Full documents are parsed as such, anything else as a body fragment so
    templates and partials do not grow ``<html>``/``<body>`` wrappers.
    """

    parser = html5lib.HTMLParser(tree=html5lib.getTreeBuilder("dom"))
    tree = parser.parse(text) if _is_document(text) else parser.parseFragment(text)

    errors = [
        MinificationError(file_name, _describe_parse_error(code, datavars or {}), line, column)
        for (line, column), code, datavars in parser.errors
        if code not in _TOLERATED_ERRORS
    ]
    if errors:
        return "", errors

    tokens = html5lib.getTreeWalker("dom")(tree)
    if options.remove_comments:
        tokens = (token for token in tokens if token["type"] != "Comment")

    serializer = HTMLSerializer(
        quote_attr_values="legacy" if options.remove_optional_attribute_quotes else "always",
        minimize_boolean_attributes=options.reduce_boolean_attributes,
        omit_optional_tags=options.remove_optional_tags,
        strip_whitespace=options.remove_empty_space,
    )
    return serializer.render(tokens).strip(), []


class CssMinifier:
    """Strategy minifying ``.css`` bundles in-process."""

    def minify(self, bundle: Bundle, file_name: Path) -> MinifierOutput:
        content, errors = minify_css(bundle.output or "", file_name, CssSettings.from_bundle(bundle))
        return MinifierOutput(content=content, errors=errors)


class HtmlMinifier:
    """Strategy minifying ``.html``/``.htm`` bundles in-process."""

    def minify(self, bundle: Bundle, file_name: Path) -> MinifierOutput:
        content, errors = minify_html(bundle.output or "", HtmlSettings.from_bundle(bundle), file_name)
        return MinifierOutput(content=content, errors=errors)


__all__ = [
    "CssMinifier",
    "CssSettings",
    "HtmlMinifier",
    "HtmlSettings",
    "minify_css",
    "minify_html",
    "scan_css_structure",
]
