"""Input row for adding ingredients."""

from __future__ import annotations

import logging
from typing import Any

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Input

from ..mco import IngredientMco
from ..task_manager import TaskManager

LOGGER = logging.getLogger(__name__)


class IngredientInput(Horizontal):
    """Name and quantity fields; Enter in either field creates an ingredient.

    The create call runs detached: the fields are cleared right away and the
    outcome arrives later, either as a bus event or as :class:`CreateFailed`.
    """

    DEFAULT_CSS = """
    IngredientInput {
        height: auto;
    }
    IngredientInput > #ingredient_name {
        width: 2fr;
    }
    IngredientInput > #ingredient_quantity {
        width: 1fr;
    }
    """

    class CreateFailed(Message):
        """Posted when a detached create call is rejected."""

        def __init__(self, name: str, quantity: str, error: BaseException) -> None:
            super().__init__()
            self.ingredient_name = name
            self.ingredient_quantity = quantity
            self.error = error

    def __init__(self, mco: IngredientMco, tasks: TaskManager, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.mco = mco
        self.tasks = tasks

    def compose(self) -> ComposeResult:
        yield Input(
            placeholder="What ingredient do you want to add?", id="ingredient_name"
        )
        yield Input(placeholder="What quantity?", id="ingredient_quantity")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.commit()

    def commit(self) -> None:
        """Send the current field values to the server and clear the fields."""
        name_input = self.query_one("#ingredient_name", Input)
        quantity_input = self.query_one("#ingredient_quantity", Input)
        name = name_input.value
        quantity = quantity_input.value

        self.tasks.spawn(
            self.mco.create({"name": name, "quantity": quantity}),
            on_error=lambda error: self._on_create_failed(name, quantity, error),
        )

        name_input.value = ""
        quantity_input.value = ""
        name_input.focus()

    def _on_create_failed(self, name: str, quantity: str, error: BaseException) -> None:
        LOGGER.warning(
            "input.create.failed",
            extra={
                "event": "input.create.failed",
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )
        self.post_message(self.CreateFailed(name, quantity, error))
