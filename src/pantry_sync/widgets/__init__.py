"""Textual widgets for the ingredient list."""

from __future__ import annotations

from .ingredient_input import IngredientInput
from .ingredient_item import IngredientItem, name_marker
from .ingredient_list import IngredientList

__all__ = ["IngredientInput", "IngredientItem", "IngredientList", "name_marker"]
