import pytest

from recipe_api.errors import ValidationFailedError
from recipe_api.models import normalize_ingredient_name, slugify
from recipe_api.pagination import create_paginated, page_offset, total_pages
from recipe_api.schemas.recipe import StepIngredientInput
from recipe_api.schemas.user import check_password_strength


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Boiled Eggs", "boiled-eggs"),
        ("Pasta  Carbonara", "pasta--carbonara"),
        ("already-slugged", "already-slugged"),
        ("", ""),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_slugify_is_idempotent():
    once = slugify("My Grandma's Apple Pie")
    assert slugify(once) == once


def test_normalize_ingredient_name():
    assert normalize_ingredient_name(" Tomato ") == "tomato"
    assert normalize_ingredient_name("tomato") == "tomato"


@pytest.mark.parametrize(
    "total, page_size, expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (15, 10, 2), (100, 1, 100)],
)
def test_total_pages(total, page_size, expected):
    assert total_pages(total, page_size) == expected


def test_page_size_zero_rejected():
    with pytest.raises(ValidationFailedError):
        total_pages(5, 0)
    with pytest.raises(ValidationFailedError):
        create_paginated([], 5, 1, 0)


def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(3, 25) == 50
    with pytest.raises(ValidationFailedError):
        page_offset(0, 10)


def test_page_past_end_is_empty_but_keeps_totals():
    page = create_paginated([], total=15, page=5, page_size=10)
    assert page.items == []
    assert page.total_pages == 2
    assert page.model_dump(by_alias=True)["pageSize"] == 10


def test_step_ingredient_requires_exactly_one_reference():
    StepIngredientInput(ingredient_index=0, quantity=1, unit="g")
    with pytest.raises(ValueError):
        StepIngredientInput(quantity=1, unit="g")
    with pytest.raises(ValueError):
        StepIngredientInput(ingredient_index=0, ingredient_name="egg", quantity=1, unit="g")


@pytest.mark.parametrize("password", ["Secret123!", "Aa1@aaaa"])
def test_strong_password_accepted(password):
    assert check_password_strength(password) == password


@pytest.mark.parametrize(
    "password", ["alllowercase1!", "NoDigits!!", "NoSpecial12", "Aa1!", "Secret123!" * 4]
)
def test_weak_password_rejected(password):
    with pytest.raises(ValueError):
        check_password_strength(password)
