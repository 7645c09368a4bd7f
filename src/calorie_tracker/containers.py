"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.openai_chat_client import OpenAIChatClient
from calorie_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from calorie_tracker.adapters.supabase_favorite_meal_repository import (
    SupabaseFavoriteMealRepository,
)
from calorie_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.adapters.supabase_water_repository import SupabaseWaterRepository
from calorie_tracker.config import Settings, is_openai_configured
from calorie_tracker.services.chat import ChatService
from calorie_tracker.services.entries import EntryLedgerService
from calorie_tracker.services.favorites import FavoriteMealService
from calorie_tracker.services.foods import FoodCatalogService
from calorie_tracker.services.goals import GoalsService
from calorie_tracker.services.metrics import MetricsService
from calorie_tracker.services.recipes import RecipeAnalyzerService
from calorie_tracker.services.security import PasswordHasher, TokenService
from calorie_tracker.services.suggestions import SuggestionsService
from calorie_tracker.services.users import AccountService
from calorie_tracker.services.vision import ImageRecognitionService
from calorie_tracker.services.water import WaterService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    account_service: AccountService
    goals_service: GoalsService
    food_service: FoodCatalogService
    entry_service: EntryLedgerService
    metrics_service: MetricsService
    water_service: WaterService
    favorite_meal_service: FavoriteMealService
    chat_service: ChatService
    suggestions_service: SuggestionsService
    recipe_service: RecipeAnalyzerService
    image_recognition_service: ImageRecognitionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)
    entry_repository = SupabaseEntryRepository(supabase_client)
    water_repository = SupabaseWaterRepository(supabase_client)
    favorite_repository = SupabaseFavoriteMealRepository(supabase_client)

    model_client: OpenAIChatClient | None = None
    if is_openai_configured(resolved_settings.openai_api_key):
        model_client = OpenAIChatClient.create(
            api_key=resolved_settings.openai_api_key or "",
            timeout_seconds=resolved_settings.openai_timeout_seconds,
        )
    else:
        _logger.warning("OpenAI API key not configured; advisory features disabled")

    token_service = TokenService(
        secret=resolved_settings.jwt_secret,
        issuer=resolved_settings.jwt_issuer,
        audience=resolved_settings.jwt_audience,
        expires_minutes=resolved_settings.jwt_expires_minutes,
    )
    account_service = AccountService(
        repository=user_repository,
        hasher=PasswordHasher(rounds=resolved_settings.password_hash_rounds),
        tokens=token_service,
    )
    entry_service = EntryLedgerService(entry_repository, food_repository)
    metrics_service = MetricsService(entry_repository)

    async def close_resources() -> None:
        if model_client is not None:
            await model_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        account_service=account_service,
        goals_service=GoalsService(user_repository),
        food_service=FoodCatalogService(food_repository),
        entry_service=entry_service,
        metrics_service=metrics_service,
        water_service=WaterService(water_repository, user_repository),
        favorite_meal_service=FavoriteMealService(
            repository=favorite_repository,
            food_repository=food_repository,
            ledger=entry_service,
        ),
        chat_service=ChatService(
            client=model_client,
            model=resolved_settings.openai_model,
            user_repository=user_repository,
            entry_repository=entry_repository,
            metrics=metrics_service,
        ),
        suggestions_service=SuggestionsService(
            client=model_client,
            model=resolved_settings.openai_model,
            user_repository=user_repository,
            metrics=metrics_service,
            goal_met_threshold=resolved_settings.suggestions_goal_met_threshold,
        ),
        recipe_service=RecipeAnalyzerService(
            client=model_client, model=resolved_settings.openai_model
        ),
        image_recognition_service=ImageRecognitionService(
            client=model_client, model=resolved_settings.openai_model
        ),
        close_resources=close_resources,
    )
