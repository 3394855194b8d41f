"""Test error handling functionality.

Verifies that custom exceptions are properly raised by the endpoint
functions and carry the attributes the handlers rely on.
"""
import uuid

import pytest

from api.history import delete_diet_entry, log_diet_entry, update_diet_entry
from api.recipes import get_recipe
from core.exceptions import (
    ConfigurationError,
    NotFoundError,
    ParseError,
    StorageError,
    ValidationError,
)
from schemas.history_schema import DietEntryCreateRequest, DietEntryUpdateRequest


def test_unknown_entry_raises_404(store):
    """Updating a non-existent history entry raises NotFoundError."""
    with pytest.raises(NotFoundError) as exc_info:
        update_diet_entry(str(uuid.uuid4()), DietEntryUpdateRequest(rating=3), store=store)
    assert "Diet history entry" in exc_info.value.message
    assert exc_info.value.status_code == 404


def test_unknown_recipe_raises_404(store):
    with pytest.raises(NotFoundError) as exc_info:
        get_recipe("missing-recipe", store=store)
    assert "Recipe" in exc_info.value.message


def test_malformed_identifier_raises_parse_error(store):
    with pytest.raises(ParseError) as exc_info:
        delete_diet_entry("123", store=store)
    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"field": "id", "value": "123"}


def test_invalid_rating_raises_validation_error(store):
    payload = DietEntryCreateRequest(
        user_id="u", diet_item_id=str(uuid.uuid4()), date_attempted="2024-01-01", rating=7, meal_type="lunch",
    )
    with pytest.raises(ValidationError) as exc_info:
        log_diet_entry(payload, store=store)
    assert exc_info.value.details == {"field": "rating"}


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    exc = NotFoundError("Recipe", 123)
    assert exc.status_code == 404
    assert "Recipe" in exc.message
    assert "123" in exc.message

    exc = ValidationError("Invalid input", field="age")
    assert exc.status_code == 400
    assert exc.message == "Invalid input"
    assert exc.details == {"field": "age"}

    exc = StorageError("disk full", operation="save_profile", entity="health_profiles")
    assert exc.status_code == 500
    assert (exc.operation, exc.entity) == ("save_profile", "health_profiles")
    assert exc.details == {"operation": "save_profile", "entity": "health_profiles"}

    exc = ConfigurationError("bad theme", config_key="SMART_DIET_THEME")
    assert exc.status_code == 500
    assert exc.details == {"config_key": "SMART_DIET_THEME"}


def test_corrupt_row_surfaces_as_storage_error(store, make_profile):
    from sqlalchemy import text

    store.save_profile(make_profile())
    with store.engine.begin() as conn:
        conn.execute(text("UPDATE health_profiles SET health_goals = '{broken' WHERE user_id = 'user-1'"))
    with pytest.raises(StorageError) as exc_info:
        store.get_profile("user-1")
    assert exc_info.value.operation == "get_profile"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
