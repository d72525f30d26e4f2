"""JSON-LD recipe extractor.

Extracts recipe data from JSON-LD structured data (schema.org/Recipe)
embedded in a page. Every metadata block is untrusted input: a block that
fails to parse or to map is skipped and the scan continues with the next one.
"""

from __future__ import annotations

import html
import json
from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

from recipe_importer.services.recipe_import.models import (
    ExtractionCandidate,
    ExtractionResult,
)
from recipe_importer.services.recipe_import.parsing import (
    clean_line,
    is_usable_title,
    parse_duration,
    parse_servings,
)


if TYPE_CHECKING:
    from collections.abc import Iterator

    from bs4 import BeautifulSoup


JSONLD_MIME_TYPE = "application/ld+json"
RECIPE_TYPE = "Recipe"

# Nesting depth searched for Recipe nodes (arrays and @graph containers)
_MAX_SEARCH_DEPTH = 4


def extract_structured(soup: BeautifulSoup, base_url: str) -> ExtractionResult:
    """Extract a recipe from the page's JSON-LD blocks.

    Args:
        soup: Parsed page.
        base_url: Document URL, used to resolve relative image URLs.

    Returns:
        COMPLETE with the first Recipe node that has a usable title,
        PARTIAL with the first Recipe node when none has a title,
        NO_MATCH when no Recipe node was found in any parseable block.
    """
    partial: ExtractionCandidate | None = None

    for raw in _iter_jsonld_blocks(soup):
        try:
            data = json.loads(raw, strict=False)
        except (ValueError, RecursionError):
            continue

        try:
            for node in _iter_recipe_nodes(data):
                candidate = _map_recipe(node, base_url)
                if is_usable_title(candidate.title):
                    return ExtractionResult.complete(candidate)
                if partial is None:
                    partial = candidate
        except Exception:  # noqa: BLE001
            continue

    if partial is not None:
        return ExtractionResult.partial(partial)
    return ExtractionResult.no_match()


def _iter_jsonld_blocks(soup: BeautifulSoup) -> Iterator[str]:
    for script in soup.find_all("script"):
        declared = str(script.get("type") or "")
        if declared.split(";")[0].strip().lower() != JSONLD_MIME_TYPE:
            continue
        raw = script.string if script.string is not None else script.get_text()
        if raw and raw.strip():
            yield raw.strip()


def _iter_recipe_nodes(data: Any, depth: int = 0) -> Iterator[dict[str, Any]]:
    """Yield Recipe-typed nodes from a parsed JSON-LD document.

    Handles a single object, an array of objects, and objects whose
    ``@graph`` array holds the actual nodes.
    """
    if depth > _MAX_SEARCH_DEPTH:
        return

    if isinstance(data, list):
        for item in data:
            yield from _iter_recipe_nodes(item, depth + 1)
        return

    if not isinstance(data, dict):
        return

    if _is_recipe_type(data.get("@type")):
        yield data

    graph = data.get("@graph")
    if isinstance(graph, list):
        yield from _iter_recipe_nodes(graph, depth + 1)


def _is_recipe_type(schema_type: Any) -> bool:
    if isinstance(schema_type, str):
        return schema_type == RECIPE_TYPE
    if isinstance(schema_type, list):
        return RECIPE_TYPE in schema_type
    return False


def _map_recipe(data: dict[str, Any], base_url: str) -> ExtractionCandidate:
    return ExtractionCandidate(
        title=_get_string(data, "name"),
        description=_get_string(data, "description"),
        ingredients=_get_ingredients(data),
        instructions=_get_instructions(data),
        cooking_time=parse_duration(data.get("cookTime")),
        prep_time=parse_duration(data.get("prepTime")),
        servings=parse_servings(data.get("recipeYield")),
        difficulty=_get_string(data, "difficulty")
        or _get_string(data, "educationalLevel"),
        image_url=_get_image(data.get("image"), base_url),
    )


def _text(value: Any) -> str | None:
    """Turn a scalar JSON value into stripped, entity-decoded text."""
    if value is None or isinstance(value, dict | list):
        return None
    text = html.unescape(str(value)).strip()
    return text or None


def _entry(value: Any) -> str | None:
    """Single-line text for one list entry (ingredient or step)."""
    return clean_line(_text(value)) or None


def _get_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    return _text(value)


def _get_ingredients(data: dict[str, Any]) -> str | None:
    ingredients = data.get("recipeIngredient")
    if ingredients is None:
        ingredients = data.get("ingredients")
    if ingredients is None:
        return None
    if not isinstance(ingredients, list):
        return _text(ingredients)

    lines = []
    for item in ingredients:
        if isinstance(item, dict):
            text = _entry(item.get("text")) or _entry(item.get("name"))
        else:
            text = _entry(item)
        if text:
            lines.append(text)
    return "\n".join(lines) or None


def _get_instructions(data: dict[str, Any]) -> str | None:
    """Join instruction steps into a numbered list.

    A plain string value is returned as-is. Arrays may mix strings,
    HowToStep objects, and HowToSection objects whose steps are inlined.
    """
    instructions = data.get("recipeInstructions")
    if instructions is None:
        return None
    if isinstance(instructions, str):
        return _text(instructions)
    if isinstance(instructions, dict):
        instructions = [instructions]
    if not isinstance(instructions, list):
        return None

    steps = [step for step in _iter_steps(instructions) if step]
    if not steps:
        return None
    return "\n".join(f"{number}. {step}" for number, step in enumerate(steps, start=1))


def _iter_steps(items: list[Any]) -> Iterator[str | None]:
    for item in items:
        if isinstance(item, dict) and item.get("@type") == "HowToSection":
            section_items = item.get("itemListElement") or []
            if isinstance(section_items, list):
                yield from _iter_steps(section_items)
        elif isinstance(item, dict):
            yield _entry(item.get("text")) or _entry(item.get("name"))
        else:
            yield _entry(item)


def _get_image(image: Any, base_url: str) -> str | None:
    """Return the first resolvable image URL from a string, list, or ImageObject."""
    if isinstance(image, str):
        url = image.strip()
        return urljoin(base_url, url) if url else None

    if isinstance(image, list):
        for item in image:
            url = _get_image(item, base_url)
            if url:
                return url
        return None

    if isinstance(image, dict):
        return _get_image(image.get("url") or image.get("contentUrl"), base_url)

    return None
