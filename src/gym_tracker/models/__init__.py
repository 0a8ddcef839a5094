"""Data models for gym-tracker."""

from .attendance import AttendanceRecord, TrainingType
from .ingredients import COMMON_INGREDIENTS, IngredientCategory
from .supplements import (
    Ingredient,
    IngredientLine,
    ProductSnapshot,
    SupplementLog,
    SupplementProduct,
)
from .user_profile import Theme, UserProfile

__all__ = [
    "AttendanceRecord",
    "COMMON_INGREDIENTS",
    "Ingredient",
    "IngredientCategory",
    "IngredientLine",
    "ProductSnapshot",
    "SupplementLog",
    "SupplementProduct",
    "Theme",
    "TrainingType",
    "UserProfile",
]
