"""Main Textual application for the shared ingredient list."""

from __future__ import annotations

import logging
import sys
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header, Label

from .config import load_config
from .events.bus import EventBus, data_hub
from .exceptions import (
    EntityNotFoundError,
    PantryError,
    TransportError,
    ValidationError,
)
from .logging_utils import configure_logging
from .mco import IngredientMco
from .task_manager import TaskManager
from .web import WebClient
from .widgets.ingredient_input import IngredientInput
from .widgets.ingredient_item import IngredientItem
from .widgets.ingredient_list import IngredientList

LOGGER = logging.getLogger(__name__)

_ERROR_LABELS: dict[type, str] = {
    ValidationError: "Invalid ingredient",
    EntityNotFoundError: "Ingredient not found",
    TransportError: "Server error",
    PantryError: "Sync error",
}


def error_label(error: BaseException) -> str:
    """Return the short sub-title label for a failed operation."""
    for error_type, label in _ERROR_LABELS.items():
        if isinstance(error, error_type):
            return label
    return "Unexpected error"


class PantryApp(App[None]):
    """Terminal view of the ingredient list kept in sync with the server."""

    CSS = """
    Screen {
        layout: vertical;
        background: $background;
    }

    #app-root {
        layout: vertical;
        width: 100%;
        height: 1fr;
    }

    #list_title {
        padding: 1 1 0 1;
        text-style: bold;
    }

    IngredientInput {
        padding: 0 1;
        border-bottom: solid $panel;
    }

    #ingredient_list {
        height: 1fr;
        padding: 0 1;
    }
    """

    DEFAULT_ACTION_DESCRIPTIONS: dict[str, str] = {
        "refresh_list": "Refresh",
        "quit": "Quit",
    }

    def __init__(
        self,
        *,
        config: dict[str, dict[str, Any]] | None = None,
        web_client: WebClient | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        configure_logging(self.config["logging"])
        LOGGER.info(
            "app.python",
            extra={
                "event": "app.python",
                "executable": sys.executable,
                "version": sys.version.split()[0],
            },
        )

        server_cfg = self.config["server"]
        self.web_client = web_client or WebClient(
            str(server_cfg["base_url"]),
            api_prefix=str(server_cfg["api_prefix"]),
            timeout=server_cfg["timeout_seconds"],
        )
        self._owns_web_client = web_client is None
        self.bus = bus if bus is not None else data_hub
        self.mco = IngredientMco(
            self.web_client, self.bus, channel=str(self.config["bus"]["channel"])
        )
        self.tasks = TaskManager()
        self._binding_specs = self._binding_specs_from_config(self.config)
        super().__init__()

    @classmethod
    def _binding_specs_from_config(
        cls, config: dict[str, dict[str, Any]]
    ) -> list[Binding]:
        keybinds = config["keybinds"]
        return [
            Binding(
                str(keybinds["refresh"]),
                "refresh_list",
                cls.DEFAULT_ACTION_DESCRIPTIONS["refresh_list"],
            ),
            Binding(
                str(keybinds["quit"]), "quit", cls.DEFAULT_ACTION_DESCRIPTIONS["quit"]
            ),
        ]

    def compose(self) -> ComposeResult:
        """Compose app widgets."""
        yield Header()
        with Container(id="app-root"):
            yield Label("ingredients", id="list_title")
            yield IngredientInput(self.mco, self.tasks, id="ingredient_input")
            yield IngredientList(self.mco, self.tasks, id="ingredient_list")
        yield Footer()

    def on_mount(self) -> None:
        """Apply the title and register configured keybindings."""
        self.title = str(self.config["app"]["title"])
        self.sub_title = self.web_client.url_for("ingredients")
        for binding in self._binding_specs:
            self.bind(binding.key, binding.action, description=binding.description)

    async def on_unmount(self) -> None:
        """Cancel background requests and release the HTTP client."""
        await self.tasks.cancel_all()
        if self._owns_web_client:
            await self.web_client.aclose()

    def action_refresh_list(self) -> None:
        """Refetch the whole list from the server."""
        self.query_one(IngredientList).schedule_refresh()

    def _show_error(self, action: str, error: BaseException) -> None:
        label = error_label(error)
        self.sub_title = label
        self.notify(f"{label}: {error}", title=action, severity="error")

    def on_ingredient_input_create_failed(
        self, event: IngredientInput.CreateFailed
    ) -> None:
        self._show_error("create", event.error)

    def on_ingredient_item_sync_failed(self, event: IngredientItem.SyncFailed) -> None:
        self._show_error(event.action, event.error)

    def on_ingredient_list_refresh_failed(
        self, event: IngredientList.RefreshFailed
    ) -> None:
        self._show_error("refresh", event.error)
