"""Food log schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import MealType


class FoodLogCreate(BaseModel):
    food_name: str = Field(..., min_length=1, max_length=255)
    calories: float = Field(..., ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    description: str | None = None
    serving_size: str | None = Field(None, max_length=100)
    meal_type: MealType = MealType.SNACK
    log_date: date | None = Field(None, description="Day to attribute the entry to (default today, UTC)")


class FoodLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    logged_at: datetime
    log_date: date
    meal_type: str
    food_name: str
    description: str | None = None
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    serving_size: str | None = None


class NutritionTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0


class DailyTotals(NutritionTotals):
    log_date: date


class FoodLogsResponse(BaseModel):
    logs: list[FoodLogRead]
    totals: NutritionTotals
    date: date


class FoodSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rows: list[DailyTotals]
    from_date: date = Field(..., alias="from")
    to_date: date = Field(..., alias="to")


class CreatedResponse(BaseModel):
    id: UUID
    success: bool = True


class SuccessResponse(BaseModel):
    success: bool = True
