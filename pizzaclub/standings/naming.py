from __future__ import annotations

import re
from typing import NamedTuple

_TOPPINGS_SUFFIX_RE = re.compile(r"\s*-\s*toppings:.*$", re.IGNORECASE | re.DOTALL)

# 18", 16', 12″ or "12 inch"
_INCH_PREFIX_RE = re.compile(r"^\d+\s*(?:[\"'″]|inch(?:es)?\b)\s*", re.IGNORECASE)
_SIZE_WORD_PREFIX_RE = re.compile(
    r"^(?:small|medium|large|x-?large|personal|family)\b\s*", re.IGNORECASE,
)

_WHITESPACE_RE = re.compile(r"\s+")
_MULTI_INGREDIENT_RE = re.compile(r"[,&]|\band\b")
_INGREDIENT_SPLIT_RE = re.compile(r"\s*[,&]\s*|\s*\band\b\s*")


class NormalizedName(NamedTuple):
    display_name: str
    comparison_key: str


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_size_prefix(name: str) -> str:
    """Drop a leading size token, keeping the original casing.

    e.g. ``18" Pepperoni`` -> ``Pepperoni``, ``Large Margherita`` -> ``Margherita``
    """
    stripped = _INCH_PREFIX_RE.sub("", name.strip())
    stripped = _SIZE_WORD_PREFIX_RE.sub("", stripped)
    return stripped.strip()


def display_name_for(order: str) -> str:
    without_toppings = _TOPPINGS_SUFFIX_RE.sub("", order)
    return _collapse_whitespace(strip_size_prefix(without_toppings))


def comparison_key_for(display_name: str) -> str:
    """Lowercased, order-insensitive key for a pizza name.

    Multi-ingredient names are split on commas, ampersands and the word
    "and", then sorted, so ``Sausage, Green Pepper`` and
    ``Green Pepper and Sausage`` produce the same key.
    """
    cleaned = _collapse_whitespace(display_name.lower())
    if not _MULTI_INGREDIENT_RE.search(cleaned):
        return cleaned

    ingredients = sorted(
        part.strip() for part in _INGREDIENT_SPLIT_RE.split(cleaned) if part.strip()
    )
    return ", ".join(ingredients)


def normalize_item_name(order: str) -> NormalizedName:
    display_name = display_name_for(order)
    return NormalizedName(display_name, comparison_key_for(display_name))
