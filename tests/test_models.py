"""Tests for entity validation and input parsing."""
import math
import uuid
from datetime import date, timedelta

import pytest

from core.exceptions import ParseError, ValidationError
from domain.models import DietRecommendation, validate_rating
from domain.parsing import parse_date, parse_optional_date, parse_timestamp, parse_uuid
from services import rules


def test_valid_profile_passes(make_profile):
    make_profile(dietary_preferences=["vegetarian"], allergies=["peanut"]).validate_fields()


@pytest.mark.parametrize("age", [17, 121, 0])
def test_profile_age_out_of_range(make_profile, age):
    with pytest.raises(ValidationError) as exc_info:
        make_profile(age=age).validate_fields()
    assert exc_info.value.details == {"field": "age"}
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("age", [18, 120])
def test_profile_age_bounds_inclusive(make_profile, age):
    make_profile(age=age).validate_fields()


@pytest.mark.parametrize("field", ["weight", "height"])
@pytest.mark.parametrize("value", [0.0, -1.5, math.nan, math.inf])
def test_profile_body_measurements_must_be_positive(make_profile, field, value):
    with pytest.raises(ValidationError) as exc_info:
        make_profile(**{field: value}).validate_fields()
    assert exc_info.value.details["field"] == field


def test_profile_restriction_cannot_be_preference(make_profile):
    profile = make_profile(dietary_preferences=["dairy"], dietary_restrictions=["dairy"])
    with pytest.raises(ValidationError, match="dairy"):
        profile.validate_fields()


def test_profile_allergy_cannot_be_preference(make_profile):
    profile = make_profile(dietary_preferences=["peanut"], allergies=["peanut"])
    with pytest.raises(ValidationError) as exc_info:
        profile.validate_fields()
    assert exc_info.value.details["field"] == "allergies"


def test_profile_rejects_unknown_activity_level(make_profile):
    with pytest.raises(ValidationError):
        make_profile(activity_level="couch").validate_fields()


def test_profile_accepts_goals_the_engine_does_not_score(make_profile, make_recipe):
    profile = make_profile(health_goals=["better_sleep"])
    profile.validate_fields()
    assert rules.goal_score(make_recipe(calories=350.0, fiber=6.0), profile) == 0.0


@pytest.mark.parametrize("rating", [None, 1, 3, 5])
def test_rating_accepts_absent_or_one_to_five(rating):
    validate_rating(rating)


@pytest.mark.parametrize("rating", [0, 6, -1])
def test_rating_rejects_out_of_range(rating):
    with pytest.raises(ValidationError):
        validate_rating(rating)


def test_history_rejects_future_date(make_entry):
    entry = make_entry(date_attempted=date.today() + timedelta(days=1))
    with pytest.raises(ValidationError) as exc_info:
        entry.validate_fields()
    assert exc_info.value.details["field"] == "date_attempted"


def test_history_accepts_today(make_entry):
    make_entry(date_attempted=date.today(), rating=4).validate_fields()


def test_recipe_validation(make_recipe):
    make_recipe().validate_fields()
    with pytest.raises(ValidationError):
        make_recipe(calories=0).validate_fields()
    with pytest.raises(ValidationError):
        make_recipe(fiber=-1).validate_fields()
    with pytest.raises(ValidationError):
        make_recipe(meal_type="brunch").validate_fields()
    with pytest.raises(ValidationError):
        make_recipe(preparation_time=0).validate_fields()


@pytest.mark.parametrize("field", ["calories", "protein", "carbs", "fat", "fiber"])
@pytest.mark.parametrize("value", [math.nan, math.inf])
def test_recipe_rejects_non_finite_nutrition(make_recipe, field, value):
    with pytest.raises(ValidationError) as exc_info:
        make_recipe(**{field: value}).validate_fields()
    assert exc_info.value.details["field"] == field


def test_recommendation_score_must_be_in_unit_interval(make_recipe):
    rec = DietRecommendation.from_recipe(make_recipe(), "user-1", 1.5, is_personalized=True)
    with pytest.raises(ValidationError):
        rec.validate_fields()


def test_from_recipe_drops_optional_flag(make_recipe):
    rec = DietRecommendation.from_recipe(make_recipe(ingredients=("rice", "egg")), "u", 0.4, False)
    assert [i.name for i in rec.ingredients] == ["rice", "egg"]
    assert not hasattr(rec.ingredients[0], "optional")
    assert rec.description == "Test Dish description"
    assert rec.is_personalized is False


def test_parse_uuid():
    value = uuid.uuid4()
    assert parse_uuid(str(value)) == value
    with pytest.raises(ParseError) as exc_info:
        parse_uuid("not-a-uuid", "diet_item_id")
    assert exc_info.value.details == {"field": "diet_item_id", "value": "not-a-uuid"}


def test_parse_date():
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_optional_date(None) is None
    assert parse_optional_date("  ") is None
    for bad in ("2024-13-01", "01/02/2024", "yesterday"):
        with pytest.raises(ParseError):
            parse_date(bad)


def test_parse_timestamp_accepts_trailing_z():
    parsed = parse_timestamp("2024-05-01T10:00:00Z")
    assert parsed.utcoffset().total_seconds() == 0
    with pytest.raises(ParseError):
        parse_timestamp("not a time")


@pytest.mark.parametrize("raw, micros", [
    ("2024-05-01T10:00:00.123456789Z", 123456),
    ("2024-05-01T10:00:00.5+00:00", 500000),
    ("2024-05-01T10:00:00.123+02:00", 123000),
])
def test_parse_timestamp_normalizes_fractional_seconds(raw, micros):
    parsed = parse_timestamp(raw)
    assert parsed.microsecond == micros
    assert parsed.tzinfo is not None
