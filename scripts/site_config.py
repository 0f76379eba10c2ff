# scripts/site_config.py
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Tuple

from utils import join_url, url_path, with_trailing_slash

ROOT = Path(__file__).resolve().parents[1]

SITE_URL = "https://kubernetes.recipes"

TRAILING_SLASH_POLICIES = ("always", "never", "ignore")

# Pages that exist outside the content collections, in sitemap order.
CUSTOM_PAGES = (
    "/",
    "/recipes/",
    "/chapters/",
    "/pricing/",
    "/authors/",
    "/about/",
    "/blog/",
    "/contact/",
)

# Same per-file cap as the site's sitemap integration.
SITEMAP_ENTRY_LIMIT = 45000


@dataclass(frozen=True)
class SiteConfig:
    site_url: str = SITE_URL
    trailing_slash: str = "ignore"
    custom_pages: Tuple[str, ...] = CUSTOM_PAGES
    content_dir: Path = field(default=ROOT / "src" / "content")
    dist_dir: Path = field(default=ROOT / "dist")
    entry_limit: int = SITEMAP_ENTRY_LIMIT

    def __post_init__(self):
        if self.trailing_slash not in TRAILING_SLASH_POLICIES:
            raise ValueError(
                f"trailing_slash must be one of {', '.join(TRAILING_SLASH_POLICIES)}, "
                f"got {self.trailing_slash!r}"
            )
        if self.entry_limit < 1:
            raise ValueError("entry_limit must be positive")

    @classmethod
    def from_env(cls, root: Path = ROOT, **overrides) -> "SiteConfig":
        """CLI defaults: repo-relative dirs, overridable via CONTENT_DIR / DIST_DIR / SITE_URL."""
        root = Path(root)
        config = cls(
            site_url=os.environ.get("SITE_URL", "").strip() or SITE_URL,
            content_dir=Path(os.environ.get("CONTENT_DIR", "").strip() or root / "src" / "content"),
            dist_dir=Path(os.environ.get("DIST_DIR", "").strip() or root / "dist"),
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(config, **overrides) if overrides else config


def page_url(config: SiteConfig, path: str) -> str:
    """Absolute URL for a site path, with the trailing-slash policy applied."""
    url = join_url(config.site_url, path)
    if config.trailing_slash == "always":
        return with_trailing_slash(url)
    if config.trailing_slash == "never" and url_path(url) != "/":
        return url.rstrip("/")
    return url
