"""
Variant registry.
"""

from __future__ import annotations

from ..state import Variant
from .base import GameVariant
from .classic import ClassicVariant
from .summer import SummerVariant

_REGISTRY: dict[Variant, GameVariant] = {
    Variant.CLASSIC: ClassicVariant(),
    Variant.SUMMER: SummerVariant(),
}


def resolve_variant(variant: Variant | str) -> Variant:
    """Accept an enum member or its string id."""
    if isinstance(variant, Variant):
        return variant
    try:
        return Variant(str(variant).lower())
    except ValueError:
        raise ValueError(f"Unknown variant: {variant}") from None


def get_variant(variant: Variant | str) -> GameVariant:
    return _REGISTRY[resolve_variant(variant)]


def list_variants() -> list[dict]:
    return [v.info() for v in _REGISTRY.values()]


__all__ = [
    "GameVariant",
    "ClassicVariant",
    "SummerVariant",
    "get_variant",
    "list_variants",
    "resolve_variant",
]
