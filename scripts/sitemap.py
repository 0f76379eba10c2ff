# scripts/sitemap.py
"""
Sitemap generation: filter redirect stubs, classify, emit.

Classification walks SITEMAP_RULES top to bottom and the first matching rule
wins. Order matters: the category hub rule must come before the recipe rule,
and the recipes index before both. The last rule is the catch-all default.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import jinja2

from errors import SitemapClassificationAmbiguity
from utils import join_url, url_path, write_text_if_changed

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
CHANGEFREQS = ("daily", "weekly", "monthly")
TOP_LEVEL_PAGES = ("chapters", "pricing", "authors")

_CATEGORY_HUB_RE = re.compile(r"^/recipes/[^/]+/?$")
_RECIPE_RE = re.compile(r"^/recipes/[^/]+/[^/]+/?$")
_TOP_LEVEL_RE = re.compile(r"^/(?:%s)/?$" % "|".join(TOP_LEVEL_PAGES))


def log(*args): print("[sitemap]", *args, flush=True)


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    priority: float
    changefreq: str


@dataclass(frozen=True)
class SitemapRule:
    name: str
    matches: Callable[[str], bool]  # receives the URL path
    priority: float
    changefreq: str

    def __post_init__(self):
        if not 0.0 <= self.priority <= 1.0:
            raise ValueError(f"{self.name}: priority out of range: {self.priority}")
        if self.changefreq not in CHANGEFREQS:
            raise ValueError(f"{self.name}: bad changefreq: {self.changefreq}")


SITEMAP_RULES = (
    SitemapRule("home", lambda p: p == "/", 1.0, "daily"),
    SitemapRule("recipes-index", lambda p: p.rstrip("/") == "/recipes", 0.95, "daily"),
    SitemapRule("recipe-category", lambda p: bool(_CATEGORY_HUB_RE.match(p)), 0.9, "weekly"),
    SitemapRule("recipe", lambda p: bool(_RECIPE_RE.match(p)), 0.85, "monthly"),
    SitemapRule("top-level", lambda p: bool(_TOP_LEVEL_RE.match(p)), 0.9, "weekly"),
    SitemapRule("blog", lambda p: "/blog/" in p, 0.8, "monthly"),
    SitemapRule("default", lambda p: True, 0.7, "weekly"),
)


def classify(url: str, rules=SITEMAP_RULES) -> SitemapEntry:
    path = url_path(url)
    for rule in rules:
        if rule.matches(path):
            return SitemapEntry(url=url, priority=rule.priority, changefreq=rule.changefreq)
    raise SitemapClassificationAmbiguity(url)


def generate_sitemap(urls, registry, rules=SITEMAP_RULES) -> list:
    """
    Drop redirect stubs, then classify what is left. Output keeps input order;
    a URL listed twice is emitted once.
    """
    entries = []
    seen = set()
    dropped = 0
    for url in urls:
        if registry.is_redirect_stub(url):
            dropped += 1
            continue
        if url in seen:
            continue
        seen.add(url)
        entries.append(classify(url, rules))
    log(f"{len(entries)} urls kept, {dropped} redirect stubs dropped")
    return entries


# ----- XML -------------------------------------------------------------------
URLSET_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="{{ ns }}">
{%- for e in entries %}
<url><loc>{{ e.url }}</loc><priority>{{ e.priority }}</priority><changefreq>{{ e.changefreq }}</changefreq></url>
{%- endfor %}
</urlset>
"""

INDEX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex xmlns="{{ ns }}">
{%- for loc in locs %}
<sitemap><loc>{{ loc }}</loc></sitemap>
{%- endfor %}
</sitemapindex>
"""

_env = jinja2.Environment(autoescape=True, keep_trailing_newline=True)


def render_urlset(entries) -> str:
    return _env.from_string(URLSET_TEMPLATE).render(ns=SITEMAP_NS, entries=entries)


def render_index(locs) -> str:
    return _env.from_string(INDEX_TEMPLATE).render(ns=SITEMAP_NS, locs=locs)


def chunk(entries, size: int):
    entries = list(entries)
    return [entries[i:i + size] for i in range(0, len(entries), size)] or [[]]


def write_sitemap(entries, config) -> list:
    """
    Write dist/sitemap-0.xml … (at most config.entry_limit urls each) and
    dist/sitemap-index.xml. Unchanged files are left untouched. Returns the
    paths written or confirmed.
    """
    out_dir = Path(config.dist_dir)
    paths = []
    locs = []
    for i, part in enumerate(chunk(entries, config.entry_limit)):
        path = out_dir / f"sitemap-{i}.xml"
        if write_text_if_changed(path, render_urlset(part)):
            log(f"wrote {path} ({len(part)} urls)")
        paths.append(path)
        locs.append(join_url(config.site_url, path.name))

    # drop parts left over from a larger previous build
    for stale in sorted(out_dir.glob("sitemap-*.xml")):
        if stale not in paths and stale.name != "sitemap-index.xml":
            stale.unlink()
            log(f"removed stale {stale}")

    index_path = out_dir / "sitemap-index.xml"
    if write_text_if_changed(index_path, render_index(locs)):
        log(f"wrote {index_path}")
    return [index_path] + paths
