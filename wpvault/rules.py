"""Node-level conversion rules layered over markdownify's HTML to Markdown engine."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from bs4 import NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import PreformattedString
from bs4.formatter import HTMLFormatter
from markdownify import ATX, MarkdownConverter

LANGUAGE_ATTRIBUTE = "data-wetm-language"

BOOLEAN_IFRAME_ATTRIBUTES = ("allowfullscreen", "allowpaymentrequest")


@dataclass(frozen=True)
class ConversionRule:
    """Predicate over a node plus the text that replaces a matching node.

    ``replacement`` receives the already converted child content and the node.
    Predicates only look at the node itself and its ancestors.
    """

    name: str
    predicate: Callable[[Tag], bool]
    replacement: Callable[[str, Tag], str]


def _class_attribute(el: Tag) -> str:
    value = el.get("class")
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def _is_text_node(node) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


class SourceOrderFormatter(HTMLFormatter):
    """Serialize tags with attributes in parsed order and HTML-style void elements."""

    def __init__(self) -> None:
        super().__init__(
            entity_substitution=EntitySubstitution.substitute_html,
            void_element_close_prefix=None,
        )

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


RAW_HTML_FORMATTER = SourceOrderFormatter()


def outer_html(el: Tag) -> str:
    return el.decode(formatter=RAW_HTML_FORMATTER)


# emphasis


def _is_em(el: Tag) -> bool:
    return el.name == "em"


def _keep_content(content: str, el: Tag) -> str:
    return content


# embeds kept as raw HTML


def _is_tweet(el: Tag) -> bool:
    return el.name == "blockquote" and _class_attribute(el) == "twitter-tweet"


def _is_codepen(el: Tag) -> bool:
    # codepen snippets changed over the years; these attributes are the common part
    return (
        el.name in ("p", "div")
        and el.has_attr("data-slug-hash")
        and _class_attribute(el) == "codepen"
    )


def _raw_block(content: str, el: Tag) -> str:
    return "\n\n" + outer_html(el) + "\n\n"


def _is_div_in_anchor(el: Tag) -> bool:
    return el.name == "div" and el.find_parent("a") is not None


def _is_script(el: Tag) -> bool:
    return el.name == "script"


def _replace_script(content: str, el: Tag) -> str:
    before = "\n\n"
    previous = el.previous_sibling
    if previous is not None and not _is_text_node(previous):
        # keep embed scripts snug against the element they belong to
        before = "\n"
    html = outer_html(el).replace('async=""', "async", 1)
    return before + html + "\n\n"


def _is_iframe(el: Tag) -> bool:
    return el.name == "iframe"


def _replace_iframe(content: str, el: Tag) -> str:
    html = outer_html(el)
    for attribute in BOOLEAN_IFRAME_ATTRIBUTES:
        html = html.replace(f'{attribute}=""', attribute, 1)
    return "\n\n" + html + "\n\n"


# figures and code


def _is_figure(el: Tag) -> bool:
    return el.name == "figure"


def _replace_figure(content: str, el: Tag) -> str:
    img = el.find("img")
    if img is None:
        return content

    src = (img.get("src") or "").split("?")[0].split("#")[0]
    image_name = posixpath.basename(src)
    embed = f"![[{image_name}|caption]]"

    figcaption = el.find("figcaption")
    if figcaption is not None:
        caption = figcaption.get_text().strip()
        return f"\n\n{embed}\n*{caption}*\n\n"
    return f"\n\n{embed}\n\n"


def _is_bare_pre(el: Tag) -> bool:
    # <pre><code> already converts cleanly through the engine
    return el.name == "pre" and el.find("code") is None


def _replace_pre(content: str, el: Tag) -> str:
    language = el.get(LANGUAGE_ATTRIBUTE) or ""
    return "\n\n```" + language + "\n" + el.get_text() + "\n```\n\n"


# theme and plugin markup


def _is_step_label(el: Tag) -> bool:
    # SWELL theme step blocks
    return (
        el.name == "div"
        and "swell-block-step__number" in _class_attribute(el).split()
        and el.select_one("span.__label") is not None
    )


def _is_footnote_reference(el: Tag) -> bool:
    return el.name == "sup" and el.has_attr("data-fn")


def _replace_footnote_reference(content: str, el: Tag) -> str:
    link = el.find("a")
    label = link.get_text() if link is not None else el.get_text()
    return f"[^{label}]"


def _is_style(el: Tag) -> bool:
    return el.name == "style"


def _is_blank_div(el: Tag) -> bool:
    return el.name == "div" and el.find(True) is None and not el.get_text().strip()


def _remove(content: str, el: Tag) -> str:
    return ""


def _block_separator(content: str, el: Tag) -> str:
    return "\n\n"


DEFAULT_RULES = (
    ConversionRule("em", _is_em, _keep_content),
    ConversionRule("tweet", _is_tweet, _raw_block),
    ConversionRule("codepen", _is_codepen, _raw_block),
    ConversionRule("div_in_anchor", _is_div_in_anchor, _keep_content),
    ConversionRule("script", _is_script, _replace_script),
    ConversionRule("iframe", _is_iframe, _replace_iframe),
    ConversionRule("figure", _is_figure, _replace_figure),
    ConversionRule("pre", _is_bare_pre, _replace_pre),
    ConversionRule("step_label", _is_step_label, _remove),
    ConversionRule("footnote", _is_footnote_reference, _replace_footnote_reference),
    ConversionRule("style", _is_style, _remove),
    ConversionRule("blank_div", _is_blank_div, _block_separator),
)


def match_rule(rules: Iterable[ConversionRule], el: Tag) -> Optional[ConversionRule]:
    """Return the first rule whose predicate accepts ``el``."""
    for rule in rules:
        if rule.predicate(el):
            return rule
    return None


class VaultMarkdownConverter(MarkdownConverter):
    """markdownify converter that checks an ordered rule list before its defaults."""

    def __init__(self, rules: Sequence[ConversionRule] = DEFAULT_RULES, **options) -> None:
        options.setdefault("heading_style", ATX)
        options.setdefault("bullets", "-")
        super().__init__(**options)
        self.rules = tuple(rules)

    def get_conv_fn(self, tag_name):
        default_fn = super().get_conv_fn(tag_name)

        def convert(el, text, parent_tags=None):
            rule = match_rule(self.rules, el)
            if rule is not None:
                return rule.replacement(text, el)
            if default_fn is None:
                return text
            return default_fn(el, text, parent_tags=parent_tags)

        return convert
