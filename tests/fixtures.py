"""
Fakes for ContentPreviewer unit tests.

Collaborator stand-ins that record calls instead of launching a browser.
"""

import asyncio

from content_previewer.domain.errors import DiagramRenderError
from content_previewer.types import RenderResult


class FakeTypesetter:
    """Records typeset/clear calls instead of touching the surface."""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    async def typeset(self, surface):
        self.calls.append("typeset")
        if self.fail:
            raise RuntimeError("typesetter exploded")

    async def clear(self, surface):
        self.calls.append("clear")


class FakeDiagramRenderer:
    """Returns a fake SVG; sources containing 'bad' fail.

    When ``gate`` is set, every render waits on it first.
    """

    def __init__(self, gate: asyncio.Event = None):
        self.gate = gate
        self.rendered = []

    async def render(self, source, diagram_id):
        if self.gate is not None:
            await self.gate.wait()
        if "bad" in source:
            raise DiagramRenderError("Parse error on line 3", diagram_id=diagram_id)
        self.rendered.append(diagram_id)
        return f"<svg data-source-id=\"{diagram_id}\"></svg>"


class FakeOrchestrator:
    """Records calls made by the input controller."""

    def __init__(self):
        self.calls = []
        self.generation = 0

    async def render(self, text, fmt):
        self.generation += 1
        self.calls.append(("render", text, fmt))
        return RenderResult(generation=self.generation, format=fmt, html=text)

    async def clear_math(self):
        self.calls.append("clear_math")

    @property
    def renders(self):
        return [call for call in self.calls if call != "clear_math"]


class RaisingConverter:
    def convert(self, content):
        raise RuntimeError("converter blew up")


class SlotEvictingRenderer(FakeDiagramRenderer):
    """Removes any surface element sharing the render id before drawing, as mermaid does."""

    def __init__(self, surface):
        super().__init__()
        self.surface = surface
        self.collisions = []

    async def render(self, source, diagram_id):
        if await self.surface.replace_element(diagram_id, "<span></span>"):
            self.collisions.append(diagram_id)
        return await super().render(source, diagram_id)


class FailingSurface:
    """Surface whose inject always raises."""

    def __init__(self):
        self.attempts = 0

    async def inject(self, html):
        self.attempts += 1
        raise RuntimeError("surface detached")

    async def get_html(self):
        return ""

    async def transform(self, func):
        raise RuntimeError("surface detached")

    async def replace_element(self, element_id, html):
        return False
