# scripts/seo_cleanup.py
"""
Remove recipe content files that were consolidated into other recipes.

A file is a leftover duplicate when the page it would build,
/recipes/<category>/<slug>/ (front-matter slug first, then the file name),
is a registered redirect stub. The site already serves a stub at that URL, so
the file only produces a page that competes with its canonical replacement.

Dry run by default (exit status 1 when duplicates are found); pass --write
to delete.
"""
import argparse
import sys
from pathlib import Path

from content_loader import list_content_files, read_front_matter
from errors import ContentParseError
from redirects import RedirectRegistry
from site_config import SiteConfig
from utils import slug_from_path


def log(*args): print("[seo-cleanup]", *args, flush=True)


def page_path(path: Path):
    """/recipes/<category>/<slug>/ the file would be published at, None if unknown."""
    try:
        fm = read_front_matter(path)
    except ContentParseError as e:
        log(f"[WARN] skipping {path}: {e}")
        return None
    category = fm.get("category")
    slug = fm.get("slug") or slug_from_path(path)
    if not isinstance(category, str) or not isinstance(slug, str):
        return None
    return f"/recipes/{category.strip()}/{slug.strip()}/"


def find_duplicates(recipes_dir: Path, registry: RedirectRegistry) -> list:
    dupes = []
    for p in list_content_files(recipes_dir):
        path = page_path(p)
        if path and registry.is_redirect_stub(path):
            dupes.append(p)
    return dupes


def main(write: bool, config=None, registry=None) -> list:
    config = config or SiteConfig.from_env()
    if registry is None:
        registry = RedirectRegistry()
    recipes_dir = Path(config.content_dir) / "recipes"

    dupes = find_duplicates(recipes_dir, registry)
    if not dupes:
        log(f"no duplicate recipes under {recipes_dir}")
        return []

    for p in dupes:
        log(("removing" if write else "would remove") + f": {p}")
        if write:
            p.unlink()

    if write:
        log(f"removed {len(dupes)} file(s). Next: rebuild the site, "
            "check the sitemap for the removed URLs, then resubmit it to search consoles.")
    else:
        log(f"{len(dupes)} file(s) to remove; rerun with --write to delete")
    return dupes


def cli(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Delete recipe files whose page is a retired duplicate")
    ap.add_argument("--write", action="store_true", help="Actually delete the files")
    args = ap.parse_args(argv)
    dupes = main(write=args.write)
    return 1 if dupes and not args.write else 0


if __name__ == "__main__":
    sys.exit(cli())
