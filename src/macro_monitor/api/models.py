"""Request payload models for the HTTP API."""

import datetime as dt

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    """Free text to log, optionally against a specific date."""

    text: str = ""
    date: dt.date | None = None


class CustomFoodRequest(BaseModel):
    """Custom food nutrients per single unit of quantity."""

    name: str = Field(min_length=1, max_length=120)
    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fiber: float = Field(default=0.0, ge=0)
    sodium: float = Field(default=0.0, ge=0)
    potassium: float = Field(default=0.0, ge=0)
    magnesium: float = Field(default=0.0, ge=0)
