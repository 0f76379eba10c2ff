# scripts/redirects.py
"""
Retired duplicate recipes.

Each legacy slug keeps a stub page at /recipes/<category>/<legacy-slug>/ that
forwards to the canonical recipe; the stub itself must never be listed in
the sitemap.
"""
from dataclasses import dataclass
from pathlib import Path

import jinja2

from content_schema import CATEGORIES
from site_config import page_url
from utils import url_path, with_trailing_slash, write_text_if_changed


def log(*args): print("[redirects]", *args, flush=True)


@dataclass(frozen=True)
class RedirectEntry:
    legacy_slug: str
    category_path: str
    target: str  # canonical site path

    @property
    def stub_path(self) -> str:
        return f"/recipes/{self.category_path}/{self.legacy_slug}/"


REDIRECTS = (
    RedirectEntry("blue-green-deployments", "deployments", "/recipes/deployments/deployment-strategies/"),
    RedirectEntry("prometheus-monitoring", "observability", "/recipes/observability/prometheus-grafana-monitoring/"),
    RedirectEntry("argocd-gitops", "gitops", "/recipes/gitops/argocd-flux-gitops/"),
    RedirectEntry("flux-gitops", "gitops", "/recipes/gitops/argocd-flux-gitops/"),
    RedirectEntry("kubernetes-jobs-cronjobs", "deployments", "/recipes/deployments/jobs-and-cronjobs/"),
    RedirectEntry("keda-event-autoscaling", "autoscaling", "/recipes/autoscaling/keda-autoscaling/"),
    RedirectEntry("container-logging", "observability", "/recipes/observability/centralized-logging/"),
    RedirectEntry("downward-api", "deployments", "/recipes/deployments/downward-api-pod-metadata/"),
    RedirectEntry("kyverno-policies", "security", "/recipes/security/policy-enforcement/"),
    RedirectEntry("velero-backup-restore", "storage", "/recipes/storage/backup-restore-velero/"),
    RedirectEntry("container-image-scanning", "security", "/recipes/security/image-security-scanning/"),
)


class RedirectRegistry:
    def __init__(self, entries=REDIRECTS):
        self.entries = tuple(entries)
        seen = set()
        for entry in self.entries:
            if entry.category_path not in CATEGORIES:
                raise ValueError(f"unknown category for redirect {entry.legacy_slug}: {entry.category_path}")
            if entry.stub_path in seen:
                raise ValueError(f"duplicate redirect: {entry.stub_path}")
            if entry.target == entry.stub_path:
                raise ValueError(f"redirect points at itself: {entry.stub_path}")
            seen.add(entry.stub_path)
        self._stub_paths = tuple(e.stub_path for e in self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def is_redirect_stub(self, url: str) -> bool:
        """
        True if `url` contains /recipes/<category>/<legacy-slug>/ for a registered
        entry. Matches the full two-segment path, so a category hub or the same
        slug under another category is never a stub.
        """
        candidate = with_trailing_slash(url_path(url))
        return any(p in candidate for p in self._stub_paths)


REDIRECT_TEMPLATE = """<!doctype html>
<meta charset="utf-8">
<title>Redirecting…</title>
<meta name="robots" content="noindex">
<link rel="canonical" href="{{ to }}">
<meta http-equiv="refresh" content="0; url={{ to }}">
<a href="{{ to }}">Redirecting to {{ to }}</a>
<script>location.href={{ to|tojson }};</script>
"""


def render_redirect_stub(to_url: str) -> str:
    return jinja2.Template(REDIRECT_TEMPLATE, autoescape=True).render(to=to_url)


def write_redirect_stubs(config, registry: RedirectRegistry) -> list:
    """Write dist/recipes/<category>/<slug>/index.html per entry; return the stub URLs."""
    urls = []
    for entry in registry:
        folder = Path(config.dist_dir) / entry.stub_path.strip("/")
        html = render_redirect_stub(page_url(config, entry.target))
        if write_text_if_changed(folder / "index.html", html):
            log(f"wrote {folder / 'index.html'} -> {entry.target}")
        urls.append(page_url(config, entry.stub_path))
    log(f"{len(urls)} redirect stubs in place")
    return urls
