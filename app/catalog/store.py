"""
Static data store for the catalogue.

Categories are fixed: each one maps a URL slug to a display name and
the Perenual query fragment that narrows the species list.  If the set
of categories ever needs to be editable, this module is the place to
load them from a backend instead.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .schemas import Category


CATEGORIES: List[Category] = [
    Category(
        slug="indoor",
        name="Indoor plants",
        description="Plants that thrive indoors",
        icon="🏠",
        filter="indoor=1",
    ),
    Category(
        slug="edible",
        name="Edible plants",
        description="Plants with edible parts",
        icon="🥗",
        filter="edible=1",
    ),
    Category(
        slug="poisonous",
        name="Poisonous plants",
        description="Plants poisonous to humans",
        icon="⚠️",
        filter="poisonous_to_humans=1",
    ),
    Category(
        slug="all",
        name="All plants",
        description="The complete species list",
        icon="🌍",
        filter="",
    ),
]

_BY_SLUG: Dict[str, Category] = {c.slug: c for c in CATEGORIES}


def list_categories() -> List[Category]:
    return list(CATEGORIES)


def get_category(slug: str) -> Optional[Category]:
    return _BY_SLUG.get((slug or "").strip().lower())


def category_title(slug: str) -> str:
    """Display name of a category, or the raw slug when it is unknown."""
    category = get_category(slug)
    return category.name if category else slug
