# scripts/errors.py
from __future__ import annotations


class SiteBuildError(Exception):
    pass


class UnknownCollection(SiteBuildError):
    def __init__(self, name: str):
        super().__init__(f"Unknown content collection: {name}")
        self.name = name


# -------------------------
# Per-record content errors (recoverable: the record is dropped)
# -------------------------
class ContentError(SiteBuildError):
    pass


class ContentParseError(ContentError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot parse front matter in {path}: {reason}")
        self.path = path
        self.reason = reason


class ValidationError(ContentError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class MissingRequiredField(ValidationError):
    def __init__(self, field: str):
        super().__init__(field, f"Missing required field: {field}")


class InvalidEnumValue(ValidationError):
    def __init__(self, field: str, value, allowed):
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            field,
            f"Invalid value {value!r} for {field}; expected one of: {', '.join(self.allowed)}",
        )


class InvalidDateFormat(ValidationError):
    def __init__(self, field: str, value):
        super().__init__(field, f"Invalid date for {field}: {value!r}")
        self.value = value


class InvalidFieldType(ValidationError):
    def __init__(self, field: str, expected: str):
        super().__init__(field, f"Invalid type for {field}: {expected}")
        self.expected = expected


# -------------------------
# Sitemap errors (fatal: the sitemap is all-or-nothing)
# -------------------------
class SitemapError(SiteBuildError):
    pass


class SitemapClassificationAmbiguity(SitemapError):
    def __init__(self, url: str):
        super().__init__(f"No sitemap rule matches {url}")
        self.url = url
