"""Shared fixtures for poptags tests."""

import logging

import pytest

from poptags import Template


@pytest.fixture
def render():
    """Render a template string against content with optional Template options."""

    def _render(template, content=None, **options):
        return Template(template=template, **options).render(content or {})

    return _render


@pytest.fixture
def reader():
    """Build a `read` callback from a dict of name -> source."""

    def _reader(sources):
        return lambda name: sources.get(name)

    return _reader


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging setup so caplog sees poptags records."""
    yield
    logger = logging.getLogger("poptags")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
