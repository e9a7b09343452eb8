"""Shared fixtures for core unit tests"""

import pytest

from mdms.core.models import Document, Metadata


STANDALONE_MD = """\
---
title: A Short Story
author: Jane Writer
content_warnings:
  - peril
---
It was a *dark* night.

The rain fell.
#
Morning came.
"""


def doc(content: str = "", **metadata) -> Document:
    return Document(metadata=Metadata(**metadata), content=content)


@pytest.fixture(name="standalone_md")
def standalone_md_fixture():
    return STANDALONE_MD


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    return doc
