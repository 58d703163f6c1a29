"""
Input validation schemas using Pydantic.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from mealkit.utilities.constants import DAYS, MEALS


class IngredientInput(BaseModel):
    """Schema for ingredient input validation (recipe lines and pantry stock)."""
    name: str = Field(..., max_length=100)
    quantity: float = Field(..., gt=0)
    unit: str = Field("", max_length=20)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Ingredient name cannot be empty')
        return v.strip()

    @field_validator('unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip() if isinstance(v, str) else v


class CookRequest(BaseModel):
    """Schema for a cook attempt on a plan slot."""
    force_deduct: bool = False
    check_only: bool = False
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: str = Field("", max_length=1000)


class ConversionRequest(BaseModel):
    quantity: float = Field(..., ge=0)
    from_unit: str = Field(..., min_length=1, max_length=20)
    to_unit: str = Field(..., min_length=1, max_length=20)
    ingredient_name: Optional[str] = None


def validate_slot(day: str, meal: str):
    """Return (day, meal) lower-cased, or raise ValueError for an unknown slot."""
    d, m = day.strip().lower(), meal.strip().lower()
    if d not in DAYS:
        raise ValueError(f"Unknown day: {day}")
    if m not in MEALS:
        raise ValueError(f"Unknown meal: {meal}")
    return d, m


def validate_ingredient(data: Any) -> Dict[str, Any]:
    """Validate raw ingredient data without raising.

    Returns {'success': True, 'ingredient': IngredientInput} or
    {'success': False, 'error': '<first validation message>'}.
    """
    try:
        ingredient = IngredientInput.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get('loc', ())) or 'ingredient'
        message = str(first.get('msg', 'Invalid value')).removeprefix('Value error, ')
        return {'success': False, 'error': f"{field}: {message}"}
    return {'success': True, 'ingredient': ingredient}
