import pytest

from services.category_queries import CATEGORY_QUERIES, CharityCategory, expand_category


def test_all_category_expands_to_broad_queries():
    assert expand_category(CharityCategory.ALL) == [
        "charity near me",
        "nonprofit near me",
        "foundation near me",
        "donation center near me",
    ]


def test_food_category_queries():
    assert expand_category(CharityCategory.FOOD) == [
        "food bank near me",
        "food pantry near me",
        "soup kitchen near me",
    ]


@pytest.mark.parametrize("category", [CharityCategory.FOOD, CharityCategory.HEALTH, CharityCategory.EDUCATION])
def test_domain_categories_have_two_or_three_queries(category):
    queries = expand_category(category)
    assert 2 <= len(queries) <= 3
    assert all(q.endswith("near me") for q in queries)


@pytest.mark.parametrize("text", ["", "   ", None, "\n\t"])
def test_other_with_blank_text_has_nothing_to_search(text):
    assert expand_category(CharityCategory.OTHER, text) == []


def test_other_with_text_searches_term_and_near_me_variant():
    assert expand_category(CharityCategory.OTHER, "red cross") == ["red cross", "red cross near me"]
    assert expand_category(CharityCategory.OTHER, "  red cross  ") == ["red cross", "red cross near me"]


def test_other_ignores_free_text_for_fixed_categories():
    assert expand_category(CharityCategory.FOOD, "ignored") == CATEGORY_QUERIES[CharityCategory.FOOD]


def test_expand_returns_a_copy():
    queries = expand_category(CharityCategory.ALL)
    queries.append("mutated")
    assert "mutated" not in expand_category(CharityCategory.ALL)


def test_category_accepts_raw_value_and_has_label():
    assert expand_category("health")[0] == "health charity near me"
    assert CharityCategory.ALL.label == "Charities"
    assert CharityCategory("other") is CharityCategory.OTHER
