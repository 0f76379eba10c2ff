# scripts/content_loader.py
"""
Load src/content/<collection>/*.md[x] into validated records.

A bad file only costs that file: its error is logged as a warning and kept in
CollectionReport.failures; every other file still loads.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import frontmatter
import yaml

from content_schema import COLLECTIONS, ContentRecord, schema_for, validate_record
from errors import ContentError, ContentParseError
from utils import slug_from_path

CONTENT_EXTS = {".md", ".mdx"}


def log(*args): print("[content]", *args, flush=True)


@dataclass
class LoadFailure:
    path: Path
    error: ContentError


@dataclass
class CollectionReport:
    collection: str
    records: list = field(default_factory=list)
    failures: list = field(default_factory=list)

    @property
    def published(self) -> list:
        return [r for r in self.records if not r.draft]

    @property
    def drafts(self) -> list:
        return [r for r in self.records if r.draft]


@dataclass
class SiteContent:
    blog: CollectionReport
    team: CollectionReport
    recipes: CollectionReport

    @property
    def reports(self):
        return (self.blog, self.team, self.recipes)

    @property
    def failures(self) -> list:
        return [f for r in self.reports for f in r.failures]


def list_content_files(directory: Path):
    if not directory.exists():
        return []
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in CONTENT_EXTS),
        key=lambda p: p.name.lower(),
    )


def read_front_matter(path: Path) -> dict:
    try:
        post = frontmatter.loads(path.read_text("utf-8"))
    except (yaml.YAMLError, TypeError, ValueError) as e:
        # TypeError: YAML parsed, but not into a mapping frontmatter can splat
        reason = str(e).splitlines()[0] if str(e) else type(e).__name__
        raise ContentParseError(str(path), reason) from e
    if not isinstance(post.metadata, dict):
        raise ContentParseError(str(path), "front matter is not a mapping")
    return dict(post.metadata)


def load_file(path: Path, collection: str) -> ContentRecord:
    """Validate one content file; raises the record's ContentError."""
    raw = read_front_matter(path)
    result = validate_record(collection, raw, slug=slug_from_path(path), source=str(path))
    if not result.ok:
        raise result.error
    return result.record


def load_collection(directory: Path, collection: str) -> CollectionReport:
    schema_for(collection)  # unknown collection is a programming fault, not a content one
    report = CollectionReport(collection=collection)
    for path in list_content_files(Path(directory)):
        try:
            record = load_file(path, collection)
        except ContentError as e:
            log(f"[WARN] {path}: {e}")
            report.failures.append(LoadFailure(path=path, error=e))
            continue
        report.records.append(record)

    log(f"{collection}: {len(report.published)} published, "
        f"{len(report.drafts)} draft, {len(report.failures)} rejected")
    return report


def load_content(config) -> SiteContent:
    root = Path(config.content_dir)
    reports = {name: load_collection(root / name, name) for name in COLLECTIONS}
    return SiteContent(**reports)
