import datetime as dt

import pydantic
import pytest

from content_schema import CATEGORIES, DIFFICULTIES, Category, Difficulty, parse_date, validate_record
from errors import (
    InvalidDateFormat,
    InvalidEnumValue,
    InvalidFieldType,
    MissingRequiredField,
    UnknownCollection,
)


def recipe(**overrides):
    raw = {
        "title": "Ingress routing",
        "description": "Route traffic with an Ingress",
        "category": "networking",
        "tags": ["ingress"],
        "publishDate": "2024-03-01",
    }
    raw.update(overrides)
    return raw


def test_valid_recipe_gets_defaults():
    result = validate_record("recipes", recipe(), slug="ingress-routing")

    assert result.ok
    r = result.record
    assert r.slug == "ingress-routing"
    assert r.category is Category.NETWORKING
    assert r.difficulty is Difficulty.INTERMEDIATE
    assert r.time_to_complete == "15 minutes"
    assert r.kubernetes_version == "1.28+"
    assert r.prerequisites == ()
    assert r.related_recipes == ()
    assert r.tags == ("ingress",)
    assert r.publish_date == dt.date(2024, 3, 1)
    assert r.updated_date is None
    assert r.author == "Luca Berton"
    assert r.draft is False
    assert r.image is None


def test_camel_case_fields_are_read():
    result = validate_record("recipes", recipe(
        difficulty="advanced",
        timeToComplete="30 minutes",
        kubernetesVersion="1.30+",
        prerequisites=["kubectl"],
        relatedRecipes=["network-policies"],
        updatedDate="2024-04-02",
        image={"src": "/img/ingress.png", "alt": "Ingress"},
    ), slug="ingress-routing")

    r = result.record
    assert r.difficulty is Difficulty.ADVANCED
    assert r.time_to_complete == "30 minutes"
    assert r.kubernetes_version == "1.30+"
    assert r.prerequisites == ("kubectl",)
    assert r.related_recipes == ("network-policies",)
    assert r.updated_date == dt.date(2024, 4, 2)
    assert r.image.src == "/img/ingress.png"


@pytest.mark.parametrize("category", CATEGORIES)
def test_every_known_category_is_accepted(category):
    result = validate_record("recipes", recipe(category=category), slug="x")
    assert result.ok
    assert result.record.category.value == category


def test_unknown_category_is_rejected_with_allowed_set():
    result = validate_record("recipes", recipe(category="databases"), slug="x")

    assert not result.ok
    err = result.error
    assert isinstance(err, InvalidEnumValue)
    assert err.field == "category"
    assert err.value == "databases"
    assert err.allowed == CATEGORIES
    assert "networking" in str(err) and "helm" in str(err)


def test_unknown_difficulty_is_rejected():
    result = validate_record("recipes", recipe(difficulty="expert"), slug="x")

    assert isinstance(result.error, InvalidEnumValue)
    assert result.error.field == "difficulty"
    assert result.error.allowed == DIFFICULTIES


def test_missing_tags_fails():
    raw = recipe()
    del raw["tags"]
    result = validate_record("recipes", raw, slug="x")

    assert result.record is None
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.field == "tags"


def test_empty_tags_counts_as_missing():
    result = validate_record("recipes", recipe(tags=[]), slug="x")
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.field == "tags"


@pytest.mark.parametrize("field", ["title", "description", "publishDate", "category"])
def test_missing_required_fields(field):
    raw = recipe()
    del raw[field]
    result = validate_record("recipes", raw, slug="x")
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.field == field


def test_blank_title_counts_as_missing():
    result = validate_record("recipes", recipe(title="   "), slug="x")
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.field == "title"


def test_bad_publish_date():
    result = validate_record("recipes", recipe(publishDate="2024-13-45"), slug="x")

    assert isinstance(result.error, InvalidDateFormat)
    assert result.error.field == "publishDate"
    assert result.error.value == "2024-13-45"


def test_bad_updated_date():
    result = validate_record("recipes", recipe(updatedDate="soon"), slug="x")
    assert isinstance(result.error, InvalidDateFormat)
    assert result.error.field == "updatedDate"


def test_draft_must_be_a_real_boolean():
    result = validate_record("recipes", recipe(draft="yes"), slug="x")
    assert isinstance(result.error, InvalidFieldType)
    assert result.error.field == "draft"


def test_image_requires_alt():
    result = validate_record("recipes", recipe(image={"src": "/a.png"}), slug="x")
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.field == "image.alt"


def test_unknown_keys_are_ignored():
    result = validate_record("recipes", recipe(layout="recipe", featured=True), slug="x")
    assert result.ok


def test_front_matter_slug_wins():
    result = validate_record("recipes", recipe(slug="custom-slug"), slug="file-slug")
    assert result.record.slug == "custom-slug"


def test_records_are_frozen():
    r = validate_record("recipes", recipe(), slug="x").record
    with pytest.raises(pydantic.ValidationError):
        r.title = "changed"


@pytest.mark.parametrize("value, expected", [
    ("2024-01-15", dt.date(2024, 1, 15)),
    ("2024-01-15T10:00:00Z", dt.date(2024, 1, 15)),
    ("January 15, 2024", dt.date(2024, 1, 15)),
    ("Jan 15, 2024", dt.date(2024, 1, 15)),
    (dt.date(2024, 1, 15), dt.date(2024, 1, 15)),
    (dt.datetime(2024, 1, 15, 8, 30), dt.date(2024, 1, 15)),
])
def test_parse_date_accepts(value, expected):
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", ["", "yesterday", "2024-02-30", 20240115, None])
def test_parse_date_rejects(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_blog_post_schema():
    raw = {
        "draft": False,
        "title": "Launch",
        "snippet": "The book is out",
        "image": {"src": "/blog/launch.png", "alt": "cover"},
        "publishDate": "2024-10-01",
        "category": "news",
        "tags": ["book"],
    }
    result = validate_record("blog", raw, slug="launch")

    assert result.ok
    assert result.record.author == "Astroship"

    del raw["draft"]
    result = validate_record("blog", raw, slug="launch")
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.field == "draft"


def test_team_member_schema():
    raw = {
        "draft": False,
        "name": "Luca Berton",
        "title": "Author",
        "publishDate": "2024-01-01",
    }
    result = validate_record("team", raw, slug="luca")
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.field == "avatar"

    raw["avatar"] = {"src": "/team/luca.jpg", "alt": "Luca"}
    assert validate_record("team", raw, slug="luca").ok


def test_unknown_collection_is_a_programming_error():
    with pytest.raises(UnknownCollection):
        validate_record("podcasts", {}, slug="x")
