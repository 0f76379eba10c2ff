# scripts/validate_site.py
import re, sys, html
from collections import Counter
from pathlib import Path

from build_site import blog_path, recipe_path
from content_loader import load_content
from redirects import RedirectRegistry
from site_config import SiteConfig, page_url

LOC_RE = re.compile(r"<loc>(.*?)</loc>", re.S)


def sitemap_urls(dist_dir: Path) -> list:
    urls = []
    for xml in sorted(Path(dist_dir).glob("sitemap-*.xml")):
        if xml.name == "sitemap-index.xml":
            continue
        urls += [html.unescape(u.strip()) for u in LOC_RE.findall(xml.read_text("utf-8"))]
    return urls


def validate(config, registry=None) -> int:
    if registry is None:
        registry = RedirectRegistry()
    errors = 0
    content = load_content(config)

    for failure in content.failures:
        print(f"[ERR] {failure.path}: {failure.error}")
        errors += 1

    for report in content.reports:
        for slug, n in Counter(r.slug for r in report.records).items():
            if n > 1:
                print(f"[ERR] duplicate {report.collection} slug: {slug} ({n} files)")
                errors += 1

    published = {r.slug for r in content.recipes.published}
    for r in content.recipes.published:
        for rel in r.related_recipes:
            if rel not in published:
                print(f"[WARN] {r.slug}: relatedRecipes names unknown recipe {rel!r}")

    dist = Path(config.dist_dir)
    if not (dist / "sitemap-index.xml").exists():
        print(f"[ERR] {dist}: missing sitemap-index.xml")
        errors += 1
    listed = set(sitemap_urls(dist))

    draft_urls = [page_url(config, recipe_path(r)) for r in content.recipes.drafts]
    draft_urls += [page_url(config, blog_path(p)) for p in content.blog.drafts]
    for url in draft_urls:
        if url in listed:
            print(f"[ERR] draft listed in sitemap: {url}")
            errors += 1

    for url in sorted(listed):
        if registry.is_redirect_stub(url):
            print(f"[ERR] redirect stub listed in sitemap: {url}")
            errors += 1

    # stub pages must exist and point somewhere
    for entry in registry:
        idx = dist / entry.stub_path.strip("/") / "index.html"
        if not idx.exists():
            print(f"[ERR] redirect stub missing index.html: {idx}")
            errors += 1
        elif entry.target.rstrip("/") not in idx.read_text("utf-8"):
            print(f"[ERR] redirect stub does not point at {entry.target}: {idx}")
            errors += 1

    print(f"[validate] done; errors={errors}")
    return errors


def main() -> int:
    return 1 if validate(SiteConfig.from_env()) else 0


if __name__ == "__main__":
    sys.exit(main())
