"""Whole-document text rewrites applied around the HTML to Markdown conversion.

Each step is a plain ``str -> str`` function. The pipelines run them in a fixed
order because later steps consume markers produced by earlier ones: the
paragraph-break marker must be in place before parsing, and language hints must
sit on the ``<pre>`` tag before the code block rule reads them.
"""

from __future__ import annotations

import re
from typing import Callable, Sequence, Tuple

from .config import PathConfig

TextRewriteStep = Callable[[str], str]

PARAGRAPH_BREAK_PATTERN = re.compile(r"(\r?\n){2}")
PARAGRAPH_BREAK_MARKER = "\n<div></div>\n"

# the lookarounds only accept a whitespace-delimited src attribute
IMAGE_SRC_PATTERN = re.compile(
    r'(<img(?=\s)[^>]+?(?<=\s)src=")[^"]*?([^/"]+?)(\?[^"]*)?("[^>]*>)',
    re.IGNORECASE,
)
BRACKETED_HEADING_PATTERN = re.compile(
    r"\[html\](&lt;|<)(h[1-6])(&gt;|>)(.+?)\1(/\2)\3\[/html\]"
)
MORE_SEPARATOR_PATTERN = re.compile(r"<(!--more( .*)?--)>")
LANGUAGE_HINT_PATTERN = re.compile(
    r'(<!-- wp:.+? \{"language":"(.+?)"\} -->\r?\n<pre )'
)

LIST_MARKER_SPACES_PATTERN = re.compile(r"(-|\d+\.) +")
EXCESS_NEWLINES_PATTERN = re.compile(r"(\r?\n){3,}")


def mark_paragraph_breaks(content: str) -> str:
    """Insert an empty ``<div>`` between double line breaks.

    The converter treats the empty block as a separator, which keeps adjacent
    paragraphs apart without touching blank lines inside other elements.
    """
    return PARAGRAPH_BREAK_PATTERN.sub(PARAGRAPH_BREAK_MARKER, content)


def rewrite_image_paths(content: str) -> str:
    """Point every ``<img src>`` at ``images/<basename>``, keeping any query string."""
    return IMAGE_SRC_PATTERN.sub(r"\1images/\2\3\4", content)


def unwrap_bracketed_html(content: str) -> str:
    """Turn ``[html]<h2>Title</h2>[/html]`` shorthand (raw or escaped) into a heading."""
    return BRACKETED_HEADING_PATTERN.sub(r"<\2>\4</\2>", content)


def escape_more_separator(content: str) -> str:
    """Escape the first ``<!--more-->`` comment so it survives as text."""
    return MORE_SEPARATOR_PATTERN.sub(r"&lt;\1&gt;", content, count=1)


def propagate_language_hints(content: str) -> str:
    """Copy a block comment's ``"language"`` value onto the ``<pre>`` that follows it."""
    return LANGUAGE_HINT_PATTERN.sub(r'\1data-wetm-language="\2" ', content)


def collapse_list_marker_spaces(markdown: str) -> str:
    return LIST_MARKER_SPACES_PATTERN.sub(r"\1 ", markdown)


def collapse_blank_lines(markdown: str) -> str:
    # paragraph-break markers leave runs of empty lines behind
    return EXCESS_NEWLINES_PATTERN.sub("\n\n", markdown)


def preprocess_steps(config: PathConfig) -> Tuple[TextRewriteStep, ...]:
    """Return the ordered pre-conversion steps for ``config``."""
    steps = [mark_paragraph_breaks]
    if config.rewrites_image_paths:
        steps.append(rewrite_image_paths)
    steps.extend(
        [
            unwrap_bracketed_html,
            escape_more_separator,
            propagate_language_hints,
        ]
    )
    return tuple(steps)


POSTPROCESS_STEPS: Tuple[TextRewriteStep, ...] = (
    collapse_list_marker_spaces,
    collapse_blank_lines,
)


def apply_steps(text: str, steps: Sequence[TextRewriteStep]) -> str:
    for step in steps:
        text = step(text)
    return text


def preprocess(content: str, config: PathConfig) -> str:
    return apply_steps(content, preprocess_steps(config))


def postprocess(markdown: str) -> str:
    return apply_steps(markdown, POSTPROCESS_STEPS)
