"""Value types exchanged with the ingredient server."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

ENTITY_KIND = "Ingredient"


class Ingredient(BaseModel):
    """A server-owned ingredient record.

    Instances are frozen: a change always produces a new value, so equality and
    identity checks done by the widgets stay meaningful.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    quantity: str

    @property
    def label(self) -> str:
        """Return the text shown for this ingredient in the list."""
        return f"{self.name} ({self.quantity})"

    @property
    def marker(self) -> str:
        """Return the identity marker used to route bus events to a widget."""
        return identity_marker(self.id)


class IngredientPatch(BaseModel):
    """Partial ingredient fields sent on create and update."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = None
    quantity: str | None = None

    @classmethod
    def coerce(cls, value: IngredientPatch | dict[str, Any]) -> IngredientPatch:
        if isinstance(value, IngredientPatch):
            return value
        return cls.model_validate(value)

    def to_payload(self) -> dict[str, str]:
        """Return the JSON body for this patch, omitting unset fields."""
        return self.model_dump(exclude_none=True)


def identity_marker(ingredient_id: int) -> str:
    return f"{ENTITY_KIND}-{ingredient_id}"
