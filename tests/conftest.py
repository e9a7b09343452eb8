"""Root test configuration: environment isolation and a sample manuscript tree"""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Strip MDMS_* variables so developer settings never leak into tests."""
    for name in list(os.environ):
        if name.startswith("MDMS_"):
            monkeypatch.delenv(name)


def write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(name="novella")
def novella_fixture(tmp_path) -> Path:
    """A small manifest-driven manuscript with two parts and three scenes."""
    root = tmp_path / "novella"
    write(root, "metadata.md", (
        "---\n"
        "title: The Lighthouse\n"
        "author: Jane Writer\n"
        "short_title: Lighthouse\n"
        "short_author: Writer\n"
        "include:\n"
        "  - Part 1/heading.md\n"
        "  - Part 1/scene1.md\n"
        "  - Part 1/scene2.md\n"
        "  - Part 2/heading.md\n"
        "  - Part 2/scene1.md\n"
        "---\n"
        "Notes about the novella.\n"
    ))
    write(root, "Part 1/heading.md", "---\nheading: Part One\n---\n")
    write(root, "Part 1/scene1.md", "The lamp was *lit* at dusk.\n\nWaves broke on the rocks.\n")
    write(root, "Part 1/scene2.md", "---\ntitle: Scene two\n---\nMorning came **slowly**.\n")
    write(root, "Part 2/heading.md", "---\nheading: Part Two\n---\n")
    write(root, "Part 2/scene1.md", "The keeper ~~left~~ stayed.\n")
    write(root, "notes.txt", "not markdown")
    return root


@pytest.fixture(name="write_file")
def write_file_fixture():
    return write
