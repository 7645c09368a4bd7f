"""Request and response bodies for the HTTP API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from calorie_tracker.domain.advisory import (
    ChatTurn,
    FoodSuggestions,
    JsonDecimal,
    SuggestedFood,
)
from calorie_tracker.domain.entries import EntryItem
from calorie_tracker.domain.favorites import FavoriteMealView
from calorie_tracker.domain.foods import Food, FoodDraft
from calorie_tracker.domain.metrics import DailyMetrics, RangeMetrics
from calorie_tracker.domain.models import AuthResult, UserGoals, UserRecord
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.domain.water import WaterEntry, WaterSummary


class ApiModel(BaseModel):
    """Base model using camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(ApiModel):
    message: str


# Accounts


class RegisterRequest(ApiModel):
    first_name: str = Field(max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(max_length=100)
    email: EmailStr
    password: str


class LoginRequest(ApiModel):
    email: EmailStr
    password: str


class UpdateProfileRequest(ApiModel):
    first_name: str = Field(max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(max_length=100)


class ChangePasswordRequest(ApiModel):
    current_password: str
    new_password: str


class ProfilePictureRequest(ApiModel):
    image_data: str


class GoalsPayload(ApiModel):
    calorie_goal: int
    protein_goal: int
    carbs_goal: int
    fat_goal: int

    @classmethod
    def from_goals(cls, goals: UserGoals) -> "GoalsPayload":
        return cls(
            calorie_goal=goals.calorie_goal,
            protein_goal=goals.protein_goal,
            carbs_goal=goals.carbs_goal,
            fat_goal=goals.fat_goal,
        )

    def to_goals(self) -> UserGoals:
        return UserGoals(
            calorie_goal=self.calorie_goal,
            protein_goal=self.protein_goal,
            carbs_goal=self.carbs_goal,
            fat_goal=self.fat_goal,
        )


class UserResponse(ApiModel):
    id: UUID
    first_name: str
    middle_name: str | None
    last_name: str
    full_name: str
    email: str
    created_at: datetime
    calorie_goal: int
    protein_goal: int
    carbs_goal: int
    fat_goal: int
    water_goal_ml: int
    profile_picture: str | None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            middle_name=user.middle_name,
            last_name=user.last_name,
            full_name=user.full_name,
            email=user.email,
            created_at=user.created_at,
            calorie_goal=user.goals.calorie_goal,
            protein_goal=user.goals.protein_goal,
            carbs_goal=user.goals.carbs_goal,
            fat_goal=user.goals.fat_goal,
            water_goal_ml=user.water_goal_ml,
            profile_picture=user.profile_picture,
        )


class AuthResponse(ApiModel):
    token: str
    user: UserResponse

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(token=result.token, user=UserResponse.from_record(result.user))


# Foods


class FoodRequest(ApiModel):
    name: str
    calories_per_100g: JsonDecimal
    protein_per_100g: JsonDecimal
    carbs_per_100g: JsonDecimal
    fat_per_100g: JsonDecimal

    def to_draft(self) -> FoodDraft:
        return FoodDraft(
            name=self.name,
            per_100g=MacroProfile(
                calories=self.calories_per_100g,
                protein=self.protein_per_100g,
                carbs=self.carbs_per_100g,
                fat=self.fat_per_100g,
            ),
        )


class FoodResponse(ApiModel):
    id: UUID
    user_id: UUID | None
    name: str
    calories_per_100g: JsonDecimal
    protein_per_100g: JsonDecimal
    carbs_per_100g: JsonDecimal
    fat_per_100g: JsonDecimal
    is_global: bool
    created_at: datetime

    @classmethod
    def from_food(cls, food: Food) -> "FoodResponse":
        return cls(
            id=food.id,
            user_id=food.user_id,
            name=food.name,
            calories_per_100g=food.per_100g.calories,
            protein_per_100g=food.per_100g.protein,
            carbs_per_100g=food.per_100g.carbs,
            fat_per_100g=food.per_100g.fat,
            is_global=food.is_global,
            created_at=food.created_at,
        )


# Entries


class CreateEntryRequest(ApiModel):
    food_id: UUID
    grams: JsonDecimal
    logged_at: datetime | None = Field(default=None, alias="date")


class UpdateEntryRequest(ApiModel):
    food_id: UUID
    grams: JsonDecimal


class EntryResponse(ApiModel):
    id: UUID
    user_id: UUID
    food_id: UUID | None
    food_name: str
    grams: JsonDecimal
    calories: JsonDecimal
    protein: JsonDecimal
    carbs: JsonDecimal
    fat: JsonDecimal
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: EntryItem) -> "EntryResponse":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            food_id=entry.food_id,
            food_name=entry.food_name,
            grams=entry.grams,
            calories=entry.macros.calories,
            protein=entry.macros.protein,
            carbs=entry.macros.carbs,
            fat=entry.macros.fat,
            created_at=entry.created_at,
        )


# Metrics


class DailyMetricsResponse(ApiModel):
    day: date = Field(alias="date")
    total_calories: JsonDecimal
    total_protein: JsonDecimal
    total_carbs: JsonDecimal
    total_fat: JsonDecimal
    entries: list[EntryResponse]

    @classmethod
    def from_metrics(cls, metrics: DailyMetrics) -> "DailyMetricsResponse":
        return cls(
            day=metrics.day,
            total_calories=metrics.totals.calories,
            total_protein=metrics.totals.protein,
            total_carbs=metrics.totals.carbs,
            total_fat=metrics.totals.fat,
            entries=[EntryResponse.from_entry(entry) for entry in metrics.entries],
        )


class DailySummaryResponse(ApiModel):
    day: date = Field(alias="date")
    calories: JsonDecimal
    protein: JsonDecimal
    carbs: JsonDecimal
    fat: JsonDecimal


class TopFoodResponse(ApiModel):
    food_id: UUID | None
    food_name: str
    total_calories: JsonDecimal
    entry_count: int


class RangeMetricsResponse(ApiModel):
    from_date: date
    to_date: date
    total_calories: JsonDecimal
    total_protein: JsonDecimal
    total_carbs: JsonDecimal
    total_fat: JsonDecimal
    daily_data: list[DailySummaryResponse]
    top_foods: list[TopFoodResponse]

    @classmethod
    def from_metrics(cls, metrics: RangeMetrics) -> "RangeMetricsResponse":
        return cls(
            from_date=metrics.start,
            to_date=metrics.end,
            total_calories=metrics.totals.calories,
            total_protein=metrics.totals.protein,
            total_carbs=metrics.totals.carbs,
            total_fat=metrics.totals.fat,
            daily_data=[
                DailySummaryResponse(
                    day=row.day,
                    calories=row.totals.calories,
                    protein=row.totals.protein,
                    carbs=row.totals.carbs,
                    fat=row.totals.fat,
                )
                for row in metrics.daily
            ],
            top_foods=[
                TopFoodResponse(
                    food_id=food.food_id,
                    food_name=food.food_name,
                    total_calories=food.total_calories,
                    entry_count=food.entry_count,
                )
                for food in metrics.top_foods
            ],
        )


# Water


class LogWaterRequest(ApiModel):
    milliliters: int
    day: date | None = Field(default=None, alias="date")


class WaterEntryResponse(ApiModel):
    id: UUID
    milliliters: int
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: WaterEntry) -> "WaterEntryResponse":
        return cls(id=entry.id, milliliters=entry.milliliters, created_at=entry.created_at)


class WaterSummaryResponse(ApiModel):
    day: date = Field(alias="date")
    total_milliliters: int
    goal_milliliters: int
    percentage_of_goal: JsonDecimal
    entries: list[WaterEntryResponse]

    @classmethod
    def from_summary(cls, summary: WaterSummary) -> "WaterSummaryResponse":
        return cls(
            day=summary.day,
            total_milliliters=summary.total_ml,
            goal_milliliters=summary.goal_ml,
            percentage_of_goal=summary.percentage_of_goal,
            entries=[WaterEntryResponse.from_entry(entry) for entry in summary.entries],
        )


# Favorite meals


class FavoriteMealItemPayload(ApiModel):
    food_id: UUID
    grams: int


class CreateFavoriteMealRequest(ApiModel):
    name: str
    description: str | None = None
    items: list[FavoriteMealItemPayload] = Field(default_factory=list)


class LogFavoriteMealRequest(ApiModel):
    logged_at: datetime | None = Field(default=None, alias="date")


class FavoriteMealItemResponse(ApiModel):
    id: UUID
    food_id: UUID
    food_name: str
    grams: int
    calories: JsonDecimal
    protein: JsonDecimal
    carbs: JsonDecimal
    fat: JsonDecimal


class FavoriteMealResponse(ApiModel):
    id: UUID
    name: str
    description: str | None
    created_at: datetime
    items: list[FavoriteMealItemResponse]
    total_calories: JsonDecimal
    total_protein: JsonDecimal
    total_carbs: JsonDecimal
    total_fat: JsonDecimal

    @classmethod
    def from_view(cls, view: FavoriteMealView) -> "FavoriteMealResponse":
        return cls(
            id=view.meal.id,
            name=view.meal.name,
            description=view.meal.description,
            created_at=view.meal.created_at,
            items=[
                FavoriteMealItemResponse(
                    id=item_view.item.id,
                    food_id=item_view.item.food_id,
                    food_name=item_view.item.food_name,
                    grams=item_view.item.grams,
                    calories=item_view.macros.calories,
                    protein=item_view.macros.protein,
                    carbs=item_view.macros.carbs,
                    fat=item_view.macros.fat,
                )
                for item_view in view.items
            ],
            total_calories=view.totals.calories,
            total_protein=view.totals.protein,
            total_carbs=view.totals.carbs,
            total_fat=view.totals.fat,
        )


# Advisory


class ChatHistoryItem(ApiModel):
    sender: str
    text: str


class ChatRequest(ApiModel):
    message: str = ""
    history: list[ChatHistoryItem] | None = None

    def turns(self) -> list[ChatTurn]:
        return [ChatTurn(sender=item.sender, text=item.text) for item in self.history or []]


class ChatResponse(ApiModel):
    reply: str


class RemainingNutrientsResponse(ApiModel):
    calories: int
    protein: JsonDecimal
    carbs: JsonDecimal
    fat: JsonDecimal


class FoodSuggestionsResponse(ApiModel):
    remaining: RemainingNutrientsResponse
    suggestions: list[SuggestedFood]
    message: str

    @classmethod
    def from_suggestions(cls, result: FoodSuggestions) -> "FoodSuggestionsResponse":
        return cls(
            remaining=RemainingNutrientsResponse(
                calories=result.remaining.calories,
                protein=result.remaining.protein,
                carbs=result.remaining.carbs,
                fat=result.remaining.fat,
            ),
            suggestions=result.suggestions,
            message=result.message,
        )


class RecipeAnalysisRequest(ApiModel):
    recipe_text: str = ""
    servings: int | None = None
