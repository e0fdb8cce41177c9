"""
Unit tests for the browser preview page template.
"""

from content_previewer.infrastructure.browser import build_page
from content_previewer.infrastructure.browser.page_template import CONTAINER_ID, MERMAID_URL
from content_previewer.types import MathConfig


class TestBuildPage:
    def test_contains_container_and_scripts(self):
        page = build_page()

        assert f'<div id="{CONTAINER_ID}"></div>' in page
        assert MERMAID_URL in page
        assert "window.mathJaxReady = true" in page

    def test_macros_drop_backslash(self):
        page = build_page(MathConfig(macros={"\\RR": "\\mathbb{R}"}))

        assert '"RR": "\\\\mathbb{R}"' in page

    def test_delimiters_are_json(self):
        page = build_page()

        assert 'inlineMath: [["$", "$"], ["\\\\(", "\\\\)"]]' in page

    def test_highlight_css_inserted(self):
        page = build_page(highlight_css=".highlight .k { color: red }")

        assert ".highlight .k { color: red }" in page
