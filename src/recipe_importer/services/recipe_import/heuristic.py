"""Heuristic HTML recipe extractor.

Used when a page has no usable JSON-LD recipe. Each field is resolved by an
ordered list of selector rules, most recipe-specific first and generic
fallbacks last; the first rule producing a non-empty value wins.

Single-valued fields use ``SelectorRule`` (selector + extract function).
Ingredients and instructions use ``CollectRule``: every element matched by
the first selector that matches anything is collected, deduplicated, and
kept in document order.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, NamedTuple
from urllib.parse import urljoin

from recipe_importer.services.recipe_import.models import ExtractionCandidate
from recipe_importer.services.recipe_import.parsing import (
    parse_duration,
    parse_servings,
)


if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag


# Strips a trailing ' | Site Name' suffix
_TITLE_SUFFIX_PATTERN = re.compile(r"\s*\|.*$", re.DOTALL)


# =============================================================================
# Extract functions
# =============================================================================


def element_text(element: Tag) -> str | None:
    """Visible text of an element on a single line."""
    text = element.get_text(" ", strip=True)
    return text or None


def element_lines(element: Tag) -> str | None:
    """Visible text of an element, one line per text node."""
    text = element.get_text("\n", strip=True)
    return text or None


def page_title(element: Tag) -> str | None:
    """Text of ``<title>`` with a trailing " | Site Name" removed."""
    text = element_text(element)
    if not text:
        return None
    return _TITLE_SUFFIX_PATTERN.sub("", text).strip() or None


def attribute(*names: str) -> Callable[[Tag], str | None]:
    """Build an extract function returning the first non-empty attribute."""

    def extract(element: Tag) -> str | None:
        for name in names:
            value = element.get(name)
            if isinstance(value, list):
                value = " ".join(value)
            if value and value.strip():
                return value.strip()
        return None

    return extract


def attribute_or_text(*names: str) -> Callable[[Tag], str | None]:
    """Prefer machine-readable attributes (microdata ``content``), else text."""
    from_attribute = attribute(*names)

    def extract(element: Tag) -> str | None:
        return from_attribute(element) or element_text(element)

    return extract


# =============================================================================
# Rules
# =============================================================================


class SelectorRule(NamedTuple):
    """A CSS selector paired with how to read a value from a matched element."""

    selector: str
    extract: Callable[[Tag], str | None] = element_text


class CollectRule(NamedTuple):
    """A CSS selector whose matches are collected into a multi-line block.

    ``numbered`` marks rules that reconstruct a list of steps; those are
    numbered 1-based during the join. Descriptive text blocks are not.
    """

    selector: str
    numbered: bool = False
    extract: Callable[[Tag], str | None] = element_text


_content = attribute("content")
_image_source = attribute("src", "data-src", "data-lazy-src", "content")
_duration_source = attribute_or_text("content", "datetime")

TITLE_RULES: tuple[SelectorRule, ...] = (
    SelectorRule("h1.recipe-title"),
    SelectorRule(".recipe-header h1"),
    SelectorRule(".recipe-title"),
    SelectorRule("h1.entry-title"),
    SelectorRule(".entry-title"),
    SelectorRule("h1"),
    SelectorRule("title", page_title),
    SelectorRule('meta[property="og:title"]', _content),
    SelectorRule('meta[name="twitter:title"]', _content),
)

DESCRIPTION_RULES: tuple[SelectorRule, ...] = (
    SelectorRule(".recipe-description"),
    SelectorRule(".recipe-summary"),
    SelectorRule(".entry-summary"),
    SelectorRule('meta[name="description"]', _content),
    SelectorRule('meta[property="og:description"]', _content),
)

INGREDIENT_RULES: tuple[CollectRule, ...] = (
    CollectRule(".recipe-ingredient"),
    CollectRule(".ingredients li"),
    CollectRule(".recipe-ingredients li"),
    CollectRule('[itemprop="recipeIngredient"]'),
    CollectRule('[itemprop="ingredients"]'),
    CollectRule(".ingredient"),
)

INSTRUCTION_RULES: tuple[CollectRule, ...] = (
    CollectRule(".recipe-instruction", numbered=True),
    CollectRule(".instructions li", numbered=True),
    CollectRule(".recipe-instructions li", numbered=True),
    CollectRule(".recipe-method li", numbered=True),
    CollectRule(".directions li", numbered=True),
    CollectRule('[itemprop="recipeInstructions"]', numbered=True),
    CollectRule(".instruction", numbered=True),
    CollectRule(".recipe-directions", extract=element_lines),
    CollectRule(".directions", extract=element_lines),
    CollectRule(".recipe-method", extract=element_lines),
)

COOK_TIME_RULES: tuple[SelectorRule, ...] = (
    SelectorRule('[itemprop="cookTime"]', _duration_source),
    SelectorRule(".recipe-cook-time"),
    SelectorRule(".cook-time"),
)

PREP_TIME_RULES: tuple[SelectorRule, ...] = (
    SelectorRule('[itemprop="prepTime"]', _duration_source),
    SelectorRule(".recipe-prep-time"),
    SelectorRule(".prep-time"),
)

SERVINGS_RULES: tuple[SelectorRule, ...] = (
    SelectorRule('[itemprop="recipeYield"]', attribute_or_text("content")),
    SelectorRule(".recipe-servings"),
    SelectorRule(".servings"),
    SelectorRule(".yield"),
)

DIFFICULTY_RULES: tuple[SelectorRule, ...] = (
    SelectorRule(".recipe-difficulty"),
    SelectorRule(".difficulty"),
)

IMAGE_RULES: tuple[SelectorRule, ...] = (
    SelectorRule('meta[property="og:image"]', _content),
    SelectorRule('meta[name="twitter:image"]', _content),
    SelectorRule(".recipe-image img", _image_source),
    SelectorRule(".recipe-photo img", _image_source),
    SelectorRule("img.recipe", _image_source),
    SelectorRule('[itemprop="image"]', _image_source),
)


# =============================================================================
# Rule evaluation
# =============================================================================


def first_match(soup: BeautifulSoup, rules: tuple[SelectorRule, ...]) -> str | None:
    """Return the first non-empty value produced by the rules, in order."""
    for rule in rules:
        for element in soup.select(rule.selector):
            value = rule.extract(element)
            if value:
                return value
    return None


def first_parsed(
    soup: BeautifulSoup,
    rules: tuple[SelectorRule, ...],
    parse: Callable[[str], int | None],
) -> int | None:
    """Return the first value the parser accepts, skipping unparsable text."""
    for rule in rules:
        for element in soup.select(rule.selector):
            value = rule.extract(element)
            parsed = parse(value) if value else None
            if parsed is not None:
                return parsed
    return None


def collect(soup: BeautifulSoup, rules: tuple[CollectRule, ...]) -> str | None:
    """Join every match of the first rule that yields any text."""
    for rule in rules:
        texts: list[str] = []
        for element in soup.select(rule.selector):
            text = rule.extract(element)
            if text and text not in texts:
                texts.append(text)
        if not texts:
            continue
        if rule.numbered:
            return "\n".join(
                f"{number}. {text}" for number, text in enumerate(texts, start=1)
            )
        return "\n".join(texts)
    return None


def extract_heuristic(soup: BeautifulSoup, base_url: str) -> ExtractionCandidate:
    """Recover recipe fields from common recipe-site markup.

    Never fails: a page with no recognizable markup yields a candidate
    with every field empty, which the normalizer then rejects.

    Args:
        soup: Parsed page.
        base_url: Document URL, used to resolve relative image URLs.

    Returns:
        ExtractionCandidate with whatever could be recovered.
    """
    image = first_match(soup, IMAGE_RULES)

    return ExtractionCandidate(
        title=first_match(soup, TITLE_RULES),
        description=first_match(soup, DESCRIPTION_RULES),
        ingredients=collect(soup, INGREDIENT_RULES),
        instructions=collect(soup, INSTRUCTION_RULES),
        cooking_time=first_parsed(soup, COOK_TIME_RULES, parse_duration),
        prep_time=first_parsed(soup, PREP_TIME_RULES, parse_duration),
        servings=first_parsed(soup, SERVINGS_RULES, parse_servings),
        difficulty=first_match(soup, DIFFICULTY_RULES),
        image_url=urljoin(base_url, image) if image else None,
    )
