# scripts/utils.py
import urllib.parse
from pathlib import Path

from slugify import slugify

# -------------------------
# Slug helpers
# -------------------------
def slug_from_path(path: Path) -> str:
    """
    Content slug the site engine gives a file: the slugified stem.

      src/content/recipes/Ingress-Routing.mdx -> ingress-routing
      src/content/recipes/pod_security.md     -> pod-security
    """
    return slugify(Path(path).stem)

# -------------------------
# URL helpers
# -------------------------
def join_url(site_url: str, path: str) -> str:
    """https://kubernetes.recipes/ + /recipes/ -> https://kubernetes.recipes/recipes/"""
    base = (site_url or "").rstrip("/")
    path = "/" + (path or "").lstrip("/")
    return base + path

def url_path(url: str) -> str:
    """Path component of an absolute URL, '/' for a bare host."""
    return urllib.parse.urlparse(url or "").path or "/"

def with_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"

# -------------------------
# Write helpers
# -------------------------
def write_text_if_changed(path: Path, content: str) -> bool:
    old = path.read_text("utf-8") if path.exists() else None
    if old == content:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True
