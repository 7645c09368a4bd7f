"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.entries import UNKNOWN_FOOD_NAME, EntryItem, NewEntry
from calorie_tracker.domain.errors import UpstreamUnavailableError
from calorie_tracker.domain.favorites import (
    FavoriteItemRequest,
    FavoriteMeal,
    FavoriteMealItem,
)
from calorie_tracker.domain.foods import Food, FoodDraft
from calorie_tracker.domain.models import (
    DEFAULT_GOALS,
    NewUser,
    UserGoals,
    UserRecord,
)
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.domain.water import WaterEntry
from calorie_tracker.services.advisory import ModelClient
from calorie_tracker.services.chat import ChatService
from calorie_tracker.services.entries import EntryLedgerService, EntryRepository
from calorie_tracker.services.favorites import (
    FavoriteMealRepository,
    FavoriteMealService,
)
from calorie_tracker.services.foods import FoodCatalogService, FoodRepository
from calorie_tracker.services.goals import GoalsService
from calorie_tracker.services.metrics import MetricsService
from calorie_tracker.services.recipes import RecipeAnalyzerService
from calorie_tracker.services.security import PasswordHasher, TokenService
from calorie_tracker.services.suggestions import SuggestionsService
from calorie_tracker.services.users import AccountService, UserRepository
from calorie_tracker.services.vision import ImageRecognitionService
from calorie_tracker.services.water import WaterRepository, WaterService

TEST_PASSWORD = "secret-pass"


def profile(calories: str, protein: str, carbs: str, fat: str) -> MacroProfile:
    return MacroProfile(
        calories=Decimal(calories),
        protein=Decimal(protein),
        carbs=Decimal(carbs),
        fat=Decimal(fat),
    )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog for tests."""

    foods: dict[UUID, Food] = field(default_factory=dict)

    def add_food(
        self,
        name: str,
        per_100g: MacroProfile,
        user_id: UUID | None = None,
    ) -> Food:
        food = Food(
            id=uuid4(),
            user_id=user_id,
            name=name,
            per_100g=per_100g,
            created_at=datetime.now(tz=UTC),
        )
        self.foods[food.id] = food
        return food

    def list_visible(self, user_id: UUID) -> list[Food]:
        visible = [food for food in self.foods.values() if _visible(food, user_id)]
        return sorted(visible, key=lambda food: food.name)

    def get_visible(self, user_id: UUID, food_id: UUID) -> Food | None:
        food = self.foods.get(food_id)
        if food is None or not _visible(food, user_id):
            return None
        return food

    def create_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        return self.add_food(draft.name, draft.per_100g, user_id)

    def update_food(
        self, user_id: UUID, food_id: UUID, draft: FoodDraft
    ) -> Food | None:
        food = self.foods.get(food_id)
        if food is None or food.user_id != user_id:
            return None
        updated = replace(food, name=draft.name, per_100g=draft.per_100g)
        self.foods[food_id] = updated
        return updated

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        food = self.foods.get(food_id)
        if food is None or food.user_id != user_id:
            return False
        del self.foods[food_id]
        return True

    def purge_user(self, user_id: UUID) -> None:
        for food_id in [f.id for f in self.foods.values() if f.user_id == user_id]:
            del self.foods[food_id]


def _visible(food: Food, user_id: UUID) -> bool:
    return food.user_id is None or food.user_id == user_id


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """Entry ledger that joins food names at read time like the database does."""

    food_repository: InMemoryFoodRepository
    rows: dict[UUID, EntryItem] = field(default_factory=dict)
    list_calls: int = 0
    bulk_writes: int = 0

    def list_entries(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[EntryItem]:
        self.list_calls += 1
        matches = [
            row
            for row in self.rows.values()
            if row.user_id == user_id
            and (start is None or row.created_at >= start)
            and (end is None or row.created_at < end)
        ]
        matches.sort(key=lambda row: row.created_at, reverse=True)
        return [self._joined(row) for row in matches]

    def list_recent(self, user_id: UUID, limit: int) -> list[EntryItem]:
        return self.list_entries(user_id, None, None)[:limit]

    def get_entry(self, user_id: UUID, entry_id: UUID) -> EntryItem | None:
        row = self.rows.get(entry_id)
        if row is None or row.user_id != user_id:
            return None
        return self._joined(row)

    def create_entry(
        self, user_id: UUID, entry: NewEntry, created_at: datetime
    ) -> EntryItem:
        row = EntryItem(
            id=uuid4(),
            user_id=user_id,
            food_id=entry.food_id,
            food_name="",
            grams=entry.grams,
            macros=entry.macros,
            created_at=created_at,
        )
        self.rows[row.id] = row
        return self._joined(row)

    def create_entries(
        self, user_id: UUID, entries: list[NewEntry], created_at: datetime
    ) -> list[EntryItem]:
        self.bulk_writes += 1
        return [self.create_entry(user_id, entry, created_at) for entry in entries]

    def update_entry(
        self, user_id: UUID, entry_id: UUID, entry: NewEntry
    ) -> EntryItem | None:
        row = self.rows.get(entry_id)
        if row is None or row.user_id != user_id:
            return None
        updated = replace(
            row, food_id=entry.food_id, grams=entry.grams, macros=entry.macros
        )
        self.rows[entry_id] = updated
        return self._joined(updated)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        row = self.rows.get(entry_id)
        if row is None or row.user_id != user_id:
            return False
        del self.rows[entry_id]
        return True

    def purge_user(self, user_id: UUID) -> None:
        for entry_id in [r.id for r in self.rows.values() if r.user_id == user_id]:
            del self.rows[entry_id]

    def _joined(self, row: EntryItem) -> EntryItem:
        food = self.food_repository.foods.get(row.food_id) if row.food_id else None
        if food is None:
            return replace(row, food_id=None, food_name=UNKNOWN_FOOD_NAME)
        return replace(row, food_name=food.name)


@dataclass
class InMemoryWaterRepository(WaterRepository):
    """In-memory water log for tests."""

    rows: dict[UUID, WaterEntry] = field(default_factory=dict)

    def list_for_day(self, user_id: UUID, day: date) -> list[WaterEntry]:
        matches = [
            row for row in self.rows.values() if row.user_id == user_id and row.day == day
        ]
        return sorted(matches, key=lambda row: row.created_at)

    def create_entry(
        self, user_id: UUID, day: date, milliliters: int, created_at: datetime
    ) -> WaterEntry:
        entry = WaterEntry(
            id=uuid4(),
            user_id=user_id,
            day=day,
            milliliters=milliliters,
            created_at=created_at,
        )
        self.rows[entry.id] = entry
        return entry

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        row = self.rows.get(entry_id)
        if row is None or row.user_id != user_id:
            return False
        del self.rows[entry_id]
        return True

    def purge_user(self, user_id: UUID) -> None:
        for entry_id in [r.id for r in self.rows.values() if r.user_id == user_id]:
            del self.rows[entry_id]


@dataclass
class _StoredMeal:
    id: UUID
    user_id: UUID
    name: str
    description: str | None
    created_at: datetime
    items: list[tuple[UUID, UUID, int]]


@dataclass
class InMemoryFavoriteMealRepository(FavoriteMealRepository):
    """Favorite meals resolved against the in-memory food catalog."""

    food_repository: InMemoryFoodRepository
    meals: dict[UUID, _StoredMeal] = field(default_factory=dict)

    def list_meals(self, user_id: UUID) -> list[FavoriteMeal]:
        owned = [meal for meal in self.meals.values() if meal.user_id == user_id]
        owned.sort(key=lambda meal: meal.created_at, reverse=True)
        return [self._resolve(meal) for meal in owned]

    def get_meal(self, user_id: UUID, meal_id: UUID) -> FavoriteMeal | None:
        meal = self.meals.get(meal_id)
        if meal is None or meal.user_id != user_id:
            return None
        return self._resolve(meal)

    def create_meal(
        self,
        user_id: UUID,
        name: str,
        description: str | None,
        items: list[FavoriteItemRequest],
    ) -> FavoriteMeal:
        meal = _StoredMeal(
            id=uuid4(),
            user_id=user_id,
            name=name,
            description=description,
            created_at=datetime.now(tz=UTC),
            items=[(uuid4(), item.food_id, item.grams) for item in items],
        )
        self.meals[meal.id] = meal
        return self._resolve(meal)

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        meal = self.meals.get(meal_id)
        if meal is None or meal.user_id != user_id:
            return False
        del self.meals[meal_id]
        return True

    def purge_user(self, user_id: UUID) -> None:
        for meal_id in [m.id for m in self.meals.values() if m.user_id == user_id]:
            del self.meals[meal_id]

    def _resolve(self, meal: _StoredMeal) -> FavoriteMeal:
        items = []
        for item_id, food_id, grams in meal.items:
            food = self.food_repository.foods.get(food_id)
            if food is None:
                continue
            items.append(
                FavoriteMealItem(
                    id=item_id,
                    food_id=food_id,
                    food_name=food.name,
                    grams=grams,
                    food_per_100g=food.per_100g,
                )
            )
        return FavoriteMeal(
            id=meal.id,
            user_id=meal.user_id,
            name=meal.name,
            description=meal.description,
            created_at=meal.created_at,
            items=items,
        )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    cascade: list[Any] = field(default_factory=list)

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, user: NewUser) -> UserRecord:
        record = UserRecord(
            id=uuid4(),
            first_name=user.first_name,
            middle_name=user.middle_name,
            last_name=user.last_name,
            email=user.email,
            password_hash=user.password_hash,
            created_at=datetime.now(tz=UTC),
            goals=DEFAULT_GOALS,
        )
        self.users[record.id] = record
        return record

    def update_goals(self, user_id: UUID, goals: UserGoals) -> UserRecord | None:
        return self._update(user_id, goals=goals)

    def update_profile(
        self,
        user_id: UUID,
        first_name: str,
        middle_name: str | None,
        last_name: str,
    ) -> UserRecord | None:
        return self._update(
            user_id, first_name=first_name, middle_name=middle_name, last_name=last_name
        )

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        self._update(user_id, password_hash=password_hash)

    def set_profile_picture(
        self, user_id: UUID, picture: str | None
    ) -> UserRecord | None:
        return self._update(user_id, profile_picture=picture)

    def delete_user_cascade(self, user_id: UUID) -> bool:
        if user_id not in self.users:
            return False
        for repository in self.cascade:
            repository.purge_user(user_id)
        del self.users[user_id]
        return True

    def _update(self, user_id: UUID, **changes: Any) -> UserRecord | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = replace(user, **changes)
        self.users[user_id] = updated
        return updated


@dataclass
class FakeModelClient(ModelClient):
    """Model client returning queued replies and recording requests."""

    replies: list[str] = field(default_factory=list)
    error: UpstreamUnavailableError | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        temperature: float | None,
        max_tokens: int,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""


@dataclass
class Repositories:
    users: InMemoryUserRepository
    foods: InMemoryFoodRepository
    entries: InMemoryEntryRepository
    water: InMemoryWaterRepository
    favorites: InMemoryFavoriteMealRepository


def build_repositories() -> Repositories:
    foods = InMemoryFoodRepository()
    entries = InMemoryEntryRepository(foods)
    water = InMemoryWaterRepository()
    favorites = InMemoryFavoriteMealRepository(foods)
    users = InMemoryUserRepository(cascade=[favorites, water, entries, foods])
    return Repositories(
        users=users, foods=foods, entries=entries, water=water, favorites=favorites
    )


def build_test_container(
    settings: Settings,
    repositories: Repositories,
    model_client: ModelClient | None,
) -> AppContainer:
    token_service = TokenService(
        secret=settings.jwt_secret,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expires_minutes=settings.jwt_expires_minutes,
    )
    entry_service = EntryLedgerService(repositories.entries, repositories.foods)
    metrics_service = MetricsService(repositories.entries)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        token_service=token_service,
        account_service=AccountService(
            repository=repositories.users,
            hasher=PasswordHasher(rounds=settings.password_hash_rounds),
            tokens=token_service,
        ),
        goals_service=GoalsService(repositories.users),
        food_service=FoodCatalogService(repositories.foods),
        entry_service=entry_service,
        metrics_service=metrics_service,
        water_service=WaterService(repositories.water, repositories.users),
        favorite_meal_service=FavoriteMealService(
            repository=repositories.favorites,
            food_repository=repositories.foods,
            ledger=entry_service,
        ),
        chat_service=ChatService(
            client=model_client,
            model=settings.openai_model,
            user_repository=repositories.users,
            entry_repository=repositories.entries,
            metrics=metrics_service,
        ),
        suggestions_service=SuggestionsService(
            client=model_client,
            model=settings.openai_model,
            user_repository=repositories.users,
            metrics=metrics_service,
            goal_met_threshold=settings.suggestions_goal_met_threshold,
        ),
        recipe_service=RecipeAnalyzerService(
            client=model_client, model=settings.openai_model
        ),
        image_recognition_service=ImageRecognitionService(
            client=model_client, model=settings.openai_model
        ),
        close_resources=close_resources,
    )


def create_user(
    repository: InMemoryUserRepository,
    email: str = "ada@example.com",
    password: str = TEST_PASSWORD,
) -> UserRecord:
    return repository.create_user(
        NewUser(
            first_name="Ada",
            middle_name=None,
            last_name="Lovelace",
            email=email,
            password_hash=PasswordHasher(rounds=4).hash(password),
        )
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        jwt_secret="test-jwt-secret-with-enough-length-for-hs256",
        openai_api_key="openai-key",
        password_hash_rounds=4,
        cors_origins=None,
    )


@pytest.fixture
def repositories() -> Repositories:
    return build_repositories()


@pytest.fixture
def user_repository(repositories: Repositories) -> InMemoryUserRepository:
    return repositories.users


@pytest.fixture
def food_repository(repositories: Repositories) -> InMemoryFoodRepository:
    return repositories.foods


@pytest.fixture
def entry_repository(repositories: Repositories) -> InMemoryEntryRepository:
    return repositories.entries


@pytest.fixture
def model_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def container(
    settings: Settings, repositories: Repositories, model_client: FakeModelClient
) -> AppContainer:
    return build_test_container(settings, repositories, model_client)


@pytest.fixture
def user(user_repository: InMemoryUserRepository) -> UserRecord:
    return create_user(user_repository)


@pytest.fixture
def auth_headers(container: AppContainer, user: UserRecord) -> dict[str, str]:
    token = container.token_service.issue(user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def chicken(food_repository: InMemoryFoodRepository) -> Food:
    return food_repository.add_food("Chicken breast", profile("165", "31", "0", "3.6"))


@pytest.fixture
def rice(food_repository: InMemoryFoodRepository) -> Food:
    return food_repository.add_food("Rice", profile("130", "2.7", "28", "0.3"))
