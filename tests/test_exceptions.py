"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from pantry_sync.exceptions import (
    ConfigValidationError,
    EntityNotFoundError,
    PantryError,
    TransportError,
    ValidationError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(ValidationError, PantryError))
        self.assertTrue(issubclass(ValidationError, ValueError))
        self.assertTrue(issubclass(TransportError, PantryError))
        self.assertTrue(issubclass(EntityNotFoundError, TransportError))
        self.assertTrue(issubclass(ConfigValidationError, PantryError))

    def test_errors_carry_context(self) -> None:
        self.assertEqual(ValidationError("x", field="name").field, "name")
        self.assertEqual(TransportError("x", status_code=502).status_code, 502)
        self.assertIsNone(TransportError("x").status_code)


if __name__ == "__main__":
    unittest.main()
