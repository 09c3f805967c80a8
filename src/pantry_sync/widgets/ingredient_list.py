"""Scrollable container mirroring the server's ingredient collection."""

from __future__ import annotations

import logging
from typing import Any

from textual.containers import VerticalScroll
from textual.message import Message

from ..events.bus import SubscriptionGroup
from ..mco import ACTION_CREATE, IngredientMco
from ..models import Ingredient
from ..task_manager import TaskManager
from .ingredient_item import IngredientItem

LOGGER = logging.getLogger(__name__)

REFRESH_TASK = "ingredients.refresh"


class IngredientList(VerticalScroll):
    """Render one :class:`IngredientItem` per ingredient on the server.

    The whole list is refetched when an ingredient is created. Updates are
    applied by the matching item itself, and deletions are not mirrored
    until the next refresh.
    """

    class RefreshFailed(Message):
        """Posted when the ingredient collection could not be fetched."""

        def __init__(self, error: BaseException) -> None:
            super().__init__()
            self.error = error

    def __init__(self, mco: IngredientMco, tasks: TaskManager, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.mco = mco
        self.tasks = tasks
        self._subscriptions: SubscriptionGroup | None = None

    @property
    def item_count(self) -> int:
        return len(self.items())

    def items(self) -> list[IngredientItem]:
        return [child for child in self.children if isinstance(child, IngredientItem)]

    def on_mount(self) -> None:
        self._subscriptions = SubscriptionGroup(self.mco.bus)
        self._subscriptions.subscribe(
            self.mco.channel, self.mco.kind, ACTION_CREATE, self._on_ingredient_create
        )
        self.schedule_refresh()

    def on_unmount(self) -> None:
        if self._subscriptions is not None:
            self._subscriptions.close()
            self._subscriptions = None

    def _on_ingredient_create(self, _ingredient: Ingredient) -> None:
        self.schedule_refresh()

    def schedule_refresh(self) -> None:
        """Refetch in the background; a newer refresh supersedes a pending one."""
        self.tasks.spawn(
            self.reload(), name=REFRESH_TASK, on_error=self._on_refresh_failed
        )

    async def reload(self) -> list[Ingredient]:
        """Fetch every ingredient and replace the children in one batch."""
        ingredients = await self.mco.list()
        items = [IngredientItem(self.mco, self.tasks, data=item) for item in ingredients]
        with self.app.batch_update():
            await self.remove_children()
            await self.mount_all(items)
        LOGGER.debug(
            "list.reloaded",
            extra={"event": "list.reloaded", "count": len(items)},
        )
        return ingredients

    def _on_refresh_failed(self, error: BaseException) -> None:
        LOGGER.warning(
            "list.refresh.failed",
            extra={
                "event": "list.refresh.failed",
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )
        self.post_message(self.RefreshFailed(error))
