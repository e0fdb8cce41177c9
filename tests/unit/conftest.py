"""
Unit test configuration for ContentPreviewer.
"""

import pytest

from content_previewer.infrastructure.surface import HtmlSurface
from content_previewer.types import PreviewConfig


@pytest.fixture
def surface():
    """Empty in-memory display surface."""
    return HtmlSurface()


@pytest.fixture
def fast_config():
    """Config with short timers so async tests finish quickly."""
    return PreviewConfig(debounce_ms=20, typeset_delay_ms=0, diagram_timeout_ms=1000)
