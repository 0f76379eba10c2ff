# scripts/content_schema.py
"""
Front-matter schemas for the three content collections (blog, team, recipes).

validate_record() never raises for bad content: it returns a ValidationResult
that either carries the frozen record (defaults applied) or exactly one named
error (MissingRequiredField, InvalidEnumValue, InvalidDateFormat,
InvalidFieldType). Unknown front-matter keys are ignored.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from errors import (
    InvalidDateFormat,
    InvalidEnumValue,
    InvalidFieldType,
    MissingRequiredField,
    UnknownCollection,
    ValidationError,
)


class Category(str, Enum):
    NETWORKING = "networking"
    STORAGE = "storage"
    SECURITY = "security"
    DEPLOYMENTS = "deployments"
    OBSERVABILITY = "observability"
    TROUBLESHOOTING = "troubleshooting"
    AUTOSCALING = "autoscaling"
    GITOPS = "gitops"
    HELM = "helm"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


CATEGORIES = tuple(c.value for c in Category)
DIFFICULTIES = tuple(d.value for d in Difficulty)

_ENUM_CHOICES = {
    "category": CATEGORIES,
    "difficulty": DIFFICULTIES,
}

# Besides ISO-8601, accept the long forms authors tend to type.
DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%Y/%m/%d")
DATE_FIELDS = ("publishDate", "updatedDate")


def parse_date(value) -> dt.date:
    """
    '2024-01-15', '2024-01-15T10:00:00Z', 'January 15, 2024' -> date(2024, 1, 15).
    YAML may already have produced a date/datetime; those pass through.
    Raises ValueError for anything else.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a date string: {value!r}")
    text = value.strip()
    try:
        return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"not a calendar date: {value!r}")


class Image(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    src: StrictStr = Field(min_length=1)
    alt: StrictStr


class ContentRecord(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    slug: StrictStr = Field(min_length=1)
    draft: StrictBool = False
    publish_date: dt.date = Field(alias="publishDate")

    @field_validator("publish_date", mode="before")
    @classmethod
    def _parse_publish_date(cls, value):
        return parse_date(value)


class RecipeRecord(ContentRecord):
    """A single how-to article under /recipes/<category>/<slug>/."""

    title: StrictStr = Field(min_length=1)
    description: StrictStr = Field(min_length=1)
    category: Category
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    time_to_complete: StrictStr = Field("15 minutes", alias="timeToComplete")
    kubernetes_version: StrictStr = Field("1.28+", alias="kubernetesVersion")
    prerequisites: tuple[StrictStr, ...] = ()
    related_recipes: tuple[StrictStr, ...] = Field((), alias="relatedRecipes")
    tags: tuple[StrictStr, ...] = Field(min_length=1)
    updated_date: Optional[dt.date] = Field(None, alias="updatedDate")
    author: StrictStr = "Luca Berton"
    image: Optional[Image] = None

    @field_validator("updated_date", mode="before")
    @classmethod
    def _parse_updated_date(cls, value):
        return None if value is None else parse_date(value)


class BlogPost(ContentRecord):
    draft: StrictBool
    title: StrictStr = Field(min_length=1)
    snippet: StrictStr = Field(min_length=1)
    image: Image
    author: StrictStr = "Astroship"
    category: StrictStr = Field(min_length=1)
    tags: tuple[StrictStr, ...]


class TeamMember(ContentRecord):
    draft: StrictBool
    name: StrictStr = Field(min_length=1)
    title: StrictStr = Field(min_length=1)
    avatar: Image


COLLECTIONS = {
    "blog": BlogPost,
    "team": TeamMember,
    "recipes": RecipeRecord,
}


@dataclass(frozen=True)
class ValidationResult:
    source: str
    record: Optional[ContentRecord] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc) or "<record>"


def _translate(err: dict) -> ValidationError:
    """Map the first pydantic error onto one of our named errors."""
    loc = err.get("loc") or ()
    field = _field_name(loc)
    kind = err.get("type", "")
    value = err.get("input")

    if kind == "missing" or kind in ("string_too_short", "too_short"):
        return MissingRequiredField(field)
    if kind == "enum" and field in _ENUM_CHOICES:
        return InvalidEnumValue(field, value, _ENUM_CHOICES[field])
    if loc and loc[0] in DATE_FIELDS and len(loc) == 1:
        return InvalidDateFormat(field, value)
    return InvalidFieldType(field, err.get("msg", kind))


def schema_for(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise UnknownCollection(collection) from None


def validate_record(collection: str, raw: dict[str, Any], slug: Optional[str] = None,
                    source: str = "") -> ValidationResult:
    model = schema_for(collection)
    data = dict(raw or {})
    # an explicit slug in front matter wins over the file-derived one
    if not data.get("slug") and slug:
        data["slug"] = slug
    try:
        record = model.model_validate(data)
    except pydantic.ValidationError as exc:
        return ValidationResult(source=source or (slug or ""), error=_translate(exc.errors()[0]))
    return ValidationResult(source=source or record.slug, record=record)
