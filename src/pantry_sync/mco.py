"""Model-controller owning remote CRUD for ingredients."""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from .events.bus import DEFAULT_CHANNEL, EventBus
from .exceptions import TransportError, ValidationError
from .models import ENTITY_KIND, Ingredient, IngredientPatch
from .web import WebClient

LOGGER = logging.getLogger(__name__)

RESOURCE = "ingredients"

ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DELETE = "delete"

PatchLike = IngredientPatch | dict[str, Any]


def validate_patch(patch: PatchLike, action: str) -> IngredientPatch:
    """Return a trimmed copy of ``patch`` or raise :class:`ValidationError`.

    Both ``name`` and ``quantity`` are required, for updates as well as creates.
    """
    try:
        candidate = IngredientPatch.coerce(patch)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Cannot {action} ingredient: {exc}") from exc

    name = (candidate.name or "").strip()
    if not name:
        raise ValidationError(
            f"Cannot {action} ingredient with empty name", field="name"
        )
    quantity = (candidate.quantity or "").strip()
    if not quantity:
        raise ValidationError(
            f"Cannot {action} ingredient with empty quantity", field="quantity"
        )
    return IngredientPatch(name=name, quantity=quantity)


def _to_ingredient(raw: Any) -> Ingredient:
    try:
        return Ingredient.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise TransportError(f"Server returned a malformed ingredient: {exc}") from exc


class IngredientMco:
    """Validate, call the server, then announce the confirmed result on the bus.

    Events are published only after the server answered successfully, so a
    subscriber never sees an effect the server has not committed.
    """

    kind = ENTITY_KIND

    def __init__(
        self,
        client: WebClient,
        bus: EventBus,
        *,
        channel: str = DEFAULT_CHANNEL,
    ) -> None:
        self.client = client
        self.bus = bus
        self.channel = channel

    async def list(self) -> list[Ingredient]:
        raw = await self.client.get(RESOURCE)
        if not isinstance(raw, list):
            raise TransportError("Server returned a non-list ingredient collection")
        ingredients = [_to_ingredient(item) for item in raw]
        LOGGER.debug(
            "mco.ingredient.list",
            extra={"event": "mco.ingredient.list", "count": len(ingredients)},
        )
        return ingredients

    async def get(self, ingredient_id: int) -> Ingredient:
        raw = await self.client.get(f"{RESOURCE}/{ingredient_id}")
        return _to_ingredient(raw)

    async def create(self, patch: PatchLike) -> Ingredient:
        checked = self._validate(patch, ACTION_CREATE)
        raw = await self.client.post(RESOURCE, checked.to_payload())
        ingredient = _to_ingredient(raw)
        self._announce(ACTION_CREATE, ingredient)
        return ingredient

    async def update(self, ingredient_id: int, patch: PatchLike) -> Ingredient:
        checked = self._validate(patch, ACTION_UPDATE, ingredient_id)
        raw = await self.client.patch(
            f"{RESOURCE}/{ingredient_id}", checked.to_payload()
        )
        ingredient = _to_ingredient(raw)
        self._announce(ACTION_UPDATE, ingredient)
        return ingredient

    async def delete(self, ingredient_id: int) -> Ingredient:
        raw = await self.client.delete(f"{RESOURCE}/{ingredient_id}")
        ingredient = _to_ingredient(raw)
        self._announce(ACTION_DELETE, ingredient)
        return ingredient

    def _validate(
        self, patch: PatchLike, action: str, ingredient_id: int | None = None
    ) -> IngredientPatch:
        try:
            return validate_patch(patch, action)
        except ValidationError as exc:
            LOGGER.warning(
                "mco.ingredient.rejected",
                extra={
                    "event": "mco.ingredient.rejected",
                    "action": action,
                    "id": ingredient_id,
                    "field": exc.field,
                },
            )
            raise

    def _announce(self, action: str, ingredient: Ingredient) -> None:
        LOGGER.info(
            f"mco.ingredient.{action}",
            extra={
                "event": f"mco.ingredient.{action}",
                "id": ingredient.id,
            },
        )
        self.bus.publish(self.channel, self.kind, action, ingredient)
