"""Row widget rendering a single ingredient."""

from __future__ import annotations

import logging
import re
from typing import Any

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Label

from ..events.bus import SubscriptionGroup
from ..mco import ACTION_UPDATE, IngredientMco
from ..models import Ingredient, IngredientPatch
from ..task_manager import TaskManager

LOGGER = logging.getLogger(__name__)

_CLASS_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def name_marker(name: str) -> str:
    """Return a CSS-safe class derived from an ingredient name."""
    slug = _CLASS_UNSAFE.sub("-", name.strip()).strip("-").lower()
    return f"name-{slug or 'blank'}"


class IngredientItem(Horizontal, can_focus=True):
    """Render one ingredient and keep it current from bus update events.

    The widget carries the identity marker ``Ingredient-{id}`` as a CSS class.
    Update events whose payload id matches that marker replace :attr:`data`
    in place; no request is made and the surrounding list is not rebuilt.
    """

    DEFAULT_CSS = """
    IngredientItem {
        height: auto;
        padding: 0 1;
    }
    IngredientItem:focus {
        background: $boost;
    }
    IngredientItem > .item-title {
        width: 1fr;
        padding: 1 1 0 1;
    }
    IngredientItem > Button {
        min-width: 5;
    }
    IngredientItem.done > .item-title {
        text-style: strike;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("space", "toggle", "Done", show=False),
        Binding("delete", "delete", "Delete", show=False),
    ]

    class SyncFailed(Message):
        """Posted when a toggle or delete request for this item fails."""

        def __init__(
            self, item: IngredientItem, action: str, error: BaseException
        ) -> None:
            super().__init__()
            self.item = item
            self.action = action
            self.error = error

    def __init__(
        self,
        mco: IngredientMco,
        tasks: TaskManager,
        data: Ingredient | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.mco = mco
        self.tasks = tasks
        self.checked = False
        self._data: Ingredient | None = None
        self._title: Label | None = None
        self._subscriptions: SubscriptionGroup | None = None
        if data is not None:
            self.data = data

    @property
    def data(self) -> Ingredient | None:
        return self._data

    @data.setter
    def data(self, value: Ingredient | dict[str, Any]) -> None:
        old = self._data
        self._data = Ingredient.model_validate(value).model_copy()
        if self.is_mounted:
            self._refresh_view(old)

    @property
    def label(self) -> str:
        """Text currently shown in the title."""
        return self._data.label if self._data is not None else ""

    def compose(self) -> ComposeResult:
        yield Button("✓", classes="item-check", variant="default")
        self._title = Label("", classes="item-title")
        yield self._title
        yield Button("✗", classes="item-delete", variant="error")

    def on_mount(self) -> None:
        self._subscriptions = SubscriptionGroup(self.mco.bus)
        self._subscriptions.subscribe(
            self.mco.channel, self.mco.kind, ACTION_UPDATE, self._on_ingredient_update
        )
        self._refresh_view()

    def on_unmount(self) -> None:
        if self._subscriptions is not None:
            self._subscriptions.close()
            self._subscriptions = None

    def _refresh_view(self, old: Ingredient | None = None) -> None:
        """Swap markers from ``old`` to the current data and rewrite the title."""
        if old is not None:
            self.remove_class(old.marker, name_marker(old.name))

        ingredient = self._data
        if ingredient is None:
            return
        self.add_class(ingredient.marker, name_marker(ingredient.name))
        if self._title is not None:
            self._title.update(Text(ingredient.label))

    def _on_ingredient_update(self, ingredient: Ingredient) -> None:
        if self.has_class(ingredient.marker):
            self.data = ingredient

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("item-check"):
            self.action_toggle()
        elif event.button.has_class("item-delete"):
            self.action_delete()

    def action_toggle(self) -> None:
        """Flip the checked marker now and confirm the entity with the server."""
        ingredient = self._data
        if ingredient is None:
            return
        self.checked = not self.checked
        self.set_class(self.checked, "done")
        # Optimistic: the local copy is replaced before the server answers.
        self.data = ingredient.model_copy()
        patch = IngredientPatch(name=ingredient.name, quantity=ingredient.quantity)

        def _revert(error: BaseException) -> None:
            self.checked = not self.checked
            self.set_class(self.checked, "done")
            self._report_failure("update", error)

        self.tasks.spawn(self.mco.update(ingredient.id, patch), on_error=_revert)

    def action_delete(self) -> None:
        ingredient = self._data
        if ingredient is None:
            return
        self.tasks.spawn(
            self.mco.delete(ingredient.id),
            on_error=lambda error: self._report_failure("delete", error),
        )

    def _report_failure(self, action: str, error: BaseException) -> None:
        LOGGER.warning(
            "item.sync.failed",
            extra={
                "event": "item.sync.failed",
                "action": action,
                "id": self._data.id if self._data is not None else None,
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )
        self.post_message(self.SyncFailed(self, action, error))
