"""
Charity categories and the text queries each one expands to.
"""

from enum import Enum
from typing import Dict, List, Optional


class CharityCategory(str, Enum):
    ALL = "all"
    FOOD = "food"
    HEALTH = "health"
    EDUCATION = "education"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: Dict[CharityCategory, str] = {
    CharityCategory.ALL: "Charities",
    CharityCategory.FOOD: "Food",
    CharityCategory.HEALTH: "Health",
    CharityCategory.EDUCATION: "Education",
    CharityCategory.OTHER: "Other",
}

CATEGORY_QUERIES: Dict[CharityCategory, List[str]] = {
    CharityCategory.ALL: [
        "charity near me",
        "nonprofit near me",
        "foundation near me",
        "donation center near me",
    ],
    CharityCategory.FOOD: [
        "food bank near me",
        "food pantry near me",
        "soup kitchen near me",
    ],
    CharityCategory.HEALTH: [
        "health charity near me",
        "hospital foundation near me",
        "blood donation near me",
    ],
    CharityCategory.EDUCATION: [
        "education charity near me",
        "scholarship foundation near me",
        "tutoring nonprofit near me",
    ],
}


def expand_category(category: CharityCategory, free_text: Optional[str] = None) -> List[str]:
    """
    Map a category to the ordered text queries to search.

    For OTHER the trimmed free text is searched as-is and with a
    " near me" suffix; blank text yields no queries (nothing to search).
    """
    category = CharityCategory(category)
    if category is CharityCategory.OTHER:
        term = (free_text or "").strip()
        if not term:
            return []
        return [term, f"{term} near me"]
    return list(CATEGORY_QUERIES[category])
