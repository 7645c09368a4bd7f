"""Tests for favorite meal templates."""

from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.favorites import FavoriteItemRequest
from calorie_tracker.services.entries import EntryLedgerService
from calorie_tracker.services.favorites import FavoriteMealService
from tests.conftest import (
    InMemoryEntryRepository,
    InMemoryFavoriteMealRepository,
    InMemoryFoodRepository,
    profile,
)


def _service() -> tuple[FavoriteMealService, InMemoryFoodRepository, InMemoryEntryRepository]:
    foods = InMemoryFoodRepository()
    entries = InMemoryEntryRepository(foods)
    service = FavoriteMealService(
        repository=InMemoryFavoriteMealRepository(foods),
        food_repository=foods,
        ledger=EntryLedgerService(entries, foods),
    )
    return service, foods, entries


def test_create_meal_computes_item_and_total_macros() -> None:
    service, foods, _ = _service()
    user_id = uuid4()
    chicken = foods.add_food("Chicken breast", profile("165", "31", "0", "3.6"))
    rice = foods.add_food("Rice", profile("130", "2.7", "28", "0.3"))

    view = service.create_meal(
        user_id,
        "  Lunch ",
        "",
        [
            FavoriteItemRequest(food_id=chicken.id, grams=150),
            FavoriteItemRequest(food_id=rice.id, grams=200),
        ],
    )

    assert view.meal.name == "Lunch"
    assert view.meal.description is None
    assert [item.macros.calories for item in view.items] == [
        Decimal("247.50"),
        Decimal("260.00"),
    ]
    assert view.totals.calories == Decimal("507.50")
    assert view.totals.carbs == Decimal("56.00")


def test_create_meal_skips_invisible_foods() -> None:
    service, foods, _ = _service()
    user_id = uuid4()
    rice = foods.add_food("Rice", profile("130", "2.7", "28", "0.3"))
    foreign = foods.add_food("Stew", profile("90", "5", "10", "2"), uuid4())

    view = service.create_meal(
        user_id,
        "Dinner",
        None,
        [
            FavoriteItemRequest(food_id=rice.id, grams=100),
            FavoriteItemRequest(food_id=foreign.id, grams=100),
            FavoriteItemRequest(food_id=uuid4(), grams=100),
        ],
    )

    assert [item.item.food_id for item in view.items] == [rice.id]


@pytest.mark.parametrize(
    ("name", "grams"),
    [(" ", 100), ("Snack", 0), ("Snack", 10001)],
)
def test_create_meal_validates_input(name: str, grams: int) -> None:
    service, foods, _ = _service()
    rice = foods.add_food("Rice", profile("130", "2.7", "28", "0.3"))

    with pytest.raises(InvalidInputError):
        service.create_meal(
            uuid4(), name, None, [FavoriteItemRequest(food_id=rice.id, grams=grams)]
        )


def test_create_meal_requires_items() -> None:
    service, _, _ = _service()

    with pytest.raises(InvalidInputError):
        service.create_meal(uuid4(), "Empty", None, [])


def test_log_meal_creates_entries_and_keeps_template() -> None:
    service, foods, entries = _service()
    user_id = uuid4()
    chicken = foods.add_food("Chicken breast", profile("165", "31", "0", "3.6"))
    rice = foods.add_food("Rice", profile("130", "2.7", "28", "0.3"))
    view = service.create_meal(
        user_id,
        "Lunch",
        None,
        [
            FavoriteItemRequest(food_id=chicken.id, grams=150),
            FavoriteItemRequest(food_id=rice.id, grams=200),
        ],
    )
    logged_at = datetime(2024, 1, 2, 12, 0, tzinfo=UTC)

    logged = service.log_meal(user_id, view.meal.id, logged_at)

    assert logged is not None
    assert [entry.food_name for entry in logged] == ["Chicken breast", "Rice"]
    assert all(entry.created_at == logged_at for entry in logged)
    assert len(entries.rows) == 2
    assert service.get_meal_items(user_id, view.meal.id) == [
        FavoriteItemRequest(food_id=chicken.id, grams=150),
        FavoriteItemRequest(food_id=rice.id, grams=200),
    ]


def test_foreign_meal_is_invisible() -> None:
    service, foods, entries = _service()
    owner = uuid4()
    rice = foods.add_food("Rice", profile("130", "2.7", "28", "0.3"))
    view = service.create_meal(
        owner, "Rice bowl", None, [FavoriteItemRequest(food_id=rice.id, grams=100)]
    )
    stranger = uuid4()

    assert service.get_meal_items(stranger, view.meal.id) is None
    assert service.log_meal(stranger, view.meal.id) is None
    assert service.delete_meal(stranger, view.meal.id) is False
    assert entries.rows == {}
    assert service.delete_meal(owner, view.meal.id) is True
    assert service.list_meals(owner) == []


def test_list_meals_reflects_current_food_profiles() -> None:
    service, foods, _ = _service()
    user_id = uuid4()
    stew = foods.add_food("Stew", profile("100", "5", "10", "2"), user_id)
    service.create_meal(
        user_id, "Stew night", None, [FavoriteItemRequest(food_id=stew.id, grams=200)]
    )
    foods.foods[stew.id] = replace(stew, per_100g=profile("150", "5", "10", "2"))

    [view] = service.list_meals(user_id)

    assert view.totals.calories == Decimal("300.00")


def test_log_meal_writes_all_entries_at_once() -> None:
    service, foods, entries = _service()
    user_id = uuid4()
    chicken = foods.add_food("Chicken breast", profile("165", "31", "0", "3.6"))
    rice = foods.add_food("Rice", profile("130", "2.7", "28", "0.3"))
    view = service.create_meal(
        user_id,
        "Lunch",
        None,
        [
            FavoriteItemRequest(food_id=chicken.id, grams=150),
            FavoriteItemRequest(food_id=rice.id, grams=200),
        ],
    )

    service.log_meal(user_id, view.meal.id)

    assert entries.bulk_writes == 1


def test_log_meal_with_bad_item_writes_nothing() -> None:
    service, foods, entries = _service()
    user_id = uuid4()
    chicken = foods.add_food("Chicken breast", profile("165", "31", "0", "3.6"))
    rice = foods.add_food("Rice", profile("130", "2.7", "28", "0.3"))
    # Stored directly, as rows written before the grams bound existed would be.
    meal = service.repository.create_meal(
        user_id,
        "Feast",
        None,
        [
            FavoriteItemRequest(food_id=chicken.id, grams=100),
            FavoriteItemRequest(food_id=rice.id, grams=20000),
        ],
    )

    with pytest.raises(InvalidInputError):
        service.log_meal(user_id, meal.id)

    assert entries.rows == {}
    assert entries.bulk_writes == 0
