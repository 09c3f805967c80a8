"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import pantry_sync


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertTrue(callable(pantry_sync.load_config))
        self.assertTrue(callable(pantry_sync.ensure_config_dir))
        self.assertIsNotNone(pantry_sync.EventBus)
        self.assertIsNotNone(pantry_sync.Ingredient)
        self.assertIsNotNone(pantry_sync.IngredientPatch)
        self.assertIsNotNone(pantry_sync.IngredientMco)
        self.assertIsNotNone(pantry_sync.WebClient)
        self.assertIsNotNone(pantry_sync.PantryError)
        self.assertIsNotNone(pantry_sync.ValidationError)
        self.assertIsNotNone(pantry_sync.TransportError)
        self.assertIsNotNone(pantry_sync.EntityNotFoundError)
        self.assertIsNotNone(pantry_sync.ConfigValidationError)

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(pantry_sync, "THIS_DOES_NOT_EXIST")


if __name__ == "__main__":
    unittest.main()
