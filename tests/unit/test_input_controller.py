"""
Unit tests for the input buffer controller.
"""

import asyncio

import pytest

from content_previewer.application import InputController, RenderOrchestrator
from content_previewer.samples import SAMPLE_DOCUMENTS
from content_previewer.types import PreviewConfig, PreviewFormat

from tests.fixtures import FakeOrchestrator


class TestDebounce:
    """Test that only the last edit in a burst is rendered."""

    @pytest.mark.asyncio
    async def test_burst_renders_once(self):
        orchestrator = FakeOrchestrator()
        controller = InputController(orchestrator, PreviewConfig(debounce_ms=60))

        for text in ["H", "He", "Hel", "Hello"]:
            controller.edit(text)
            await asyncio.sleep(0.005)

        assert controller.pending
        assert orchestrator.renders == []

        await asyncio.sleep(0.2)

        assert orchestrator.renders == [("render", "Hello", PreviewFormat.MARKDOWN)]
        assert not controller.pending
        assert controller.last_result.html == "Hello"

    @pytest.mark.asyncio
    async def test_separate_edits_render_separately(self, fast_config):
        orchestrator = FakeOrchestrator()
        controller = InputController(orchestrator, fast_config)

        controller.edit("one")
        await asyncio.sleep(0.08)
        controller.edit("two")
        await asyncio.sleep(0.08)

        assert [call[1] for call in orchestrator.renders] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_edit_updates_buffer_immediately(self, fast_config):
        controller = InputController(FakeOrchestrator(), fast_config)

        controller.edit("draft")

        assert controller.text == "draft"
        controller.close()

    @pytest.mark.asyncio
    async def test_close_cancels_pending_render(self, fast_config):
        orchestrator = FakeOrchestrator()
        controller = InputController(orchestrator, fast_config)

        controller.edit("never rendered")
        controller.close()
        await asyncio.sleep(0.08)

        assert orchestrator.renders == []
        assert not controller.pending


class TestFlush:
    @pytest.mark.asyncio
    async def test_flush_renders_immediately(self):
        orchestrator = FakeOrchestrator()
        controller = InputController(orchestrator, PreviewConfig(debounce_ms=10000))

        controller.edit("now")
        result = await controller.flush()

        assert result.html == "now"
        assert orchestrator.renders == [("render", "now", PreviewFormat.MARKDOWN)]
        assert not controller.pending

    @pytest.mark.asyncio
    async def test_flush_without_edits(self, fast_config):
        controller = InputController(FakeOrchestrator(), fast_config)

        assert await controller.flush() is None


class TestFormatSwitch:
    """Test immediate re-rendering on format change."""

    @pytest.mark.asyncio
    async def test_set_format_clears_then_renders(self, fast_config):
        orchestrator = FakeOrchestrator()
        controller = InputController(orchestrator, fast_config)
        controller.edit("$x$")

        await controller.set_format(PreviewFormat.LATEX)

        assert orchestrator.calls == ["clear_math", ("render", "$x$", PreviewFormat.LATEX)]
        assert controller.format is PreviewFormat.LATEX
        assert not controller.pending

    @pytest.mark.asyncio
    async def test_set_format_accepts_string(self, fast_config):
        controller = InputController(FakeOrchestrator(), fast_config)

        await controller.set_format("html")

        assert controller.format is PreviewFormat.HTML

    @pytest.mark.asyncio
    async def test_placeholder_follows_format(self, fast_config):
        controller = InputController(FakeOrchestrator(), fast_config)

        assert controller.placeholder == SAMPLE_DOCUMENTS[PreviewFormat.MARKDOWN]

        await controller.set_format(PreviewFormat.LATEX)

        assert controller.placeholder == SAMPLE_DOCUMENTS[PreviewFormat.LATEX]

    @pytest.mark.asyncio
    async def test_custom_placeholders(self, fast_config):
        placeholders = {PreviewFormat.MARKDOWN: "type markdown"}
        controller = InputController(FakeOrchestrator(), fast_config, placeholders=placeholders)

        assert controller.placeholder == "type markdown"

        await controller.set_format(PreviewFormat.HTML)

        assert controller.placeholder == ""

    @pytest.mark.asyncio
    async def test_switch_clears_stale_math(self, surface, fast_config):
        orchestrator = RenderOrchestrator(surface, fast_config)
        controller = InputController(orchestrator, fast_config)
        controller.edit("Inline $x^2$")
        await controller.flush()
        assert "math-rendered math-inline" in surface.html

        await controller.set_format(PreviewFormat.HTML)
        await orchestrator.drain()

        assert surface.html.count("math-rendered") == 1
        assert "<p>" not in surface.html
