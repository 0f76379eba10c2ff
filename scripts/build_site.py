#!/usr/bin/env python3
# scripts/build_site.py
"""
One site build, after the page renderer has run:

- loads and validates src/content/{blog,team,recipes}
- writes the redirect stub pages for retired recipes
- resolves the site's URL set and writes dist/sitemap-*.xml

Record errors are warnings (the record is left out); --strict turns them into
a failing exit status. Sitemap errors always abort the build.
"""
import argparse
import sys
from pathlib import Path

from content_loader import load_content
from content_schema import CATEGORIES
from redirects import RedirectRegistry, write_redirect_stubs
from site_config import TRAILING_SLASH_POLICIES, SiteConfig, page_url
from sitemap import generate_sitemap, write_sitemap


def log(*args): print("[build]", *args, flush=True)


def recipe_path(record) -> str:
    return f"/recipes/{record.category.value}/{record.slug}/"


def blog_path(record) -> str:
    return f"/blog/{record.slug}/"


def resolve_site_urls(config, content) -> list:
    """
    Custom pages, then one hub per category that has published recipes, then
    the recipes, then the blog posts. Drafts never get a URL.
    """
    recipes = sorted(content.recipes.published, key=lambda r: r.slug)
    used = {r.category.value for r in recipes}

    paths = list(config.custom_pages)
    paths += [f"/recipes/{c}/" for c in CATEGORIES if c in used]
    paths += [recipe_path(r) for r in recipes]
    paths += [blog_path(p) for p in sorted(content.blog.published, key=lambda p: p.slug)]
    return [page_url(config, p) for p in paths]


def build(config, registry=None, strict=False) -> int:
    if registry is None:
        registry = RedirectRegistry()
    content = load_content(config)

    stub_urls = write_redirect_stubs(config, registry)
    # stubs are physically present in dist/, so they are part of the site's URL set
    urls = resolve_site_urls(config, content) + stub_urls

    entries = generate_sitemap(urls, registry)
    write_sitemap(entries, config)

    failures = content.failures
    log(f"done; urls={len(entries)}, rejected records={len(failures)}")
    if failures and strict:
        log("strict mode: failing build because of rejected records")
        return 1
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Validate content, write redirect stubs and the sitemap")
    ap.add_argument("--content-dir", type=Path, help="Content collections root (default: src/content)")
    ap.add_argument("--dist-dir", type=Path, help="Build output directory (default: dist)")
    ap.add_argument("--site-url", help="Absolute site URL")
    ap.add_argument("--trailing-slash", choices=TRAILING_SLASH_POLICIES, help="Trailing slash policy for URLs")
    ap.add_argument("--strict", action="store_true", help="Exit 1 if any content record is rejected")
    args = ap.parse_args(argv)

    config = SiteConfig.from_env(
        content_dir=args.content_dir,
        dist_dir=args.dist_dir,
        site_url=args.site_url,
        trailing_slash=args.trailing_slash,
    )
    return build(config, strict=args.strict)


if __name__ == "__main__":
    sys.exit(main())
