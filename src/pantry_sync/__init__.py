"""Top-level package for the PantryTerm ingredient client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import PantryApp
    from .config import ensure_config_dir, load_config
    from .events.bus import EventBus
    from .exceptions import (
        ConfigValidationError,
        EntityNotFoundError,
        PantryError,
        TransportError,
        ValidationError,
    )
    from .mco import IngredientMco
    from .models import Ingredient, IngredientPatch
    from .web import WebClient

__all__ = [
    "ConfigValidationError",
    "EntityNotFoundError",
    "EventBus",
    "Ingredient",
    "IngredientMco",
    "IngredientPatch",
    "PantryApp",
    "PantryError",
    "TransportError",
    "ValidationError",
    "WebClient",
    "ensure_config_dir",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols to keep the Textual UI optional at import time."""
    if name in {"ensure_config_dir", "load_config"}:
        from .config import ensure_config_dir, load_config

        return {"ensure_config_dir": ensure_config_dir, "load_config": load_config}[name]
    if name in {
        "ConfigValidationError",
        "EntityNotFoundError",
        "PantryError",
        "TransportError",
        "ValidationError",
    }:
        from . import exceptions

        return getattr(exceptions, name)
    if name in {"Ingredient", "IngredientPatch"}:
        from . import models

        return getattr(models, name)
    if name == "EventBus":
        from .events.bus import EventBus

        return EventBus
    if name == "IngredientMco":
        from .mco import IngredientMco

        return IngredientMco
    if name == "WebClient":
        from .web import WebClient

        return WebClient
    if name == "PantryApp":
        from .app import PantryApp

        return PantryApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
