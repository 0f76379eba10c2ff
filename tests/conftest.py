from pathlib import Path

import pytest

from site_config import SiteConfig


RECIPE_FM = """---
title: "{title}"
description: "How to {title}"
category: {category}
tags: [kubernetes, {category}]
publishDate: "2024-03-01"
draft: {draft}
---
Body of {title}.
"""


def write_content(root: Path, collection: str, name: str, text: str) -> Path:
    folder = root / collection
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_text(text, encoding="utf-8")
    return path


def write_recipe(root: Path, slug: str, category: str = "networking", draft: bool = False) -> Path:
    text = RECIPE_FM.format(title=slug.replace("-", " "), category=category, draft=str(draft).lower())
    return write_content(root, "recipes", f"{slug}.md", text)


@pytest.fixture
def config(tmp_path):
    return SiteConfig(content_dir=tmp_path / "content", dist_dir=tmp_path / "dist")
