"""
Craft Category Catalog
Defines the fixed set of craft categories creators can list themselves under.
Used by the categories listing, the Explore filter and creator profile validation.
"""

from typing import Dict, Optional

# Explore filter value meaning "no category filter"
ALL_CATEGORIES = "All"

CATEGORIES = [
    {
        "name": "Fashion Design",
        "description": "Custom clothing, alterations, and unique fashion pieces",
    },
    {
        "name": "Home Baking",
        "description": "Freshly baked cakes, cookies, breads, and pastries",
    },
    {
        "name": "Jewelry Making",
        "description": "Handcrafted jewelry, imitation and custom designs",
    },
    {
        "name": "Embroidery",
        "description": "Traditional and modern embroidery work",
    },
    {
        "name": "Candle Making",
        "description": "Decorative and scented handmade candles",
    },
    {
        "name": "Pottery",
        "description": "Handcrafted ceramic items and pottery art",
    },
    {
        "name": "Crochet & Knitting",
        "description": "Hand-knitted and crocheted items",
    },
    {
        "name": "Mehendi Art",
        "description": "Beautiful henna designs for all occasions",
    },
    {
        "name": "Custom Cakes",
        "description": "Designer cakes for special celebrations",
    },
    {
        "name": "Photography",
        "description": "Professional photography services",
    },
    {
        "name": "Painting",
        "description": "Original artworks and custom paintings",
    },
    {
        "name": "Calligraphy",
        "description": "Beautiful hand-lettering and calligraphy art",
    },
]


def get_category(name: str) -> Optional[Dict[str, str]]:
    for category in CATEGORIES:
        if category["name"] == name:
            return category
    return None


def is_known_category(name: str) -> bool:
    return get_category(name) is not None


def normalize_category_filter(category: Optional[str]) -> Optional[str]:
    """Map the Explore selector value to a filter; empty or "All" means no filter."""
    if not category:
        return None
    category = category.strip()
    if not category or category == ALL_CATEGORIES:
        return None
    return category
