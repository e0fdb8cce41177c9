"""
Unit tests for configuration and shared types.
"""

import pytest

from content_previewer.domain.errors import ConfigError, ErrorCode
from content_previewer.types import (
    BLACKBOARD_MACROS,
    MathConfig,
    PreviewConfig,
    PreviewFormat,
)


class TestPreviewFormat:
    @pytest.mark.parametrize("value,expected", [
        ("markdown", PreviewFormat.MARKDOWN),
        ("LaTeX", PreviewFormat.LATEX),
        (" html ", PreviewFormat.HTML),
        (PreviewFormat.LATEX, PreviewFormat.LATEX),
    ])
    def test_parse(self, value, expected):
        assert PreviewFormat.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ConfigError) as exc_info:
            PreviewFormat.parse("rtf")

        assert exc_info.value.code is ErrorCode.CONFIG_INVALID


class TestMathConfig:
    def test_default_macros(self):
        assert MathConfig().macros == BLACKBOARD_MACROS
        assert set(BLACKBOARD_MACROS) == {"\\RR", "\\CC", "\\NN", "\\ZZ", "\\QQ", "\\FF"}

    def test_delimiters_longest_first(self):
        lefts = [left for left, _, _ in MathConfig().delimiters()]

        assert lefts.index("$$") < lefts.index("$")

    def test_delimiters_flag_display(self):
        flags = {left: display for left, _, display in MathConfig().delimiters()}

        assert flags == {"$$": True, "\\[": True, "$": False, "\\(": False}


class TestPreviewConfigFromDict:
    """Test building configuration from a plain mapping."""

    def test_defaults(self):
        assert PreviewConfig.from_dict({}) == PreviewConfig()
        assert PreviewConfig.from_dict(None) == PreviewConfig()

    def test_default_values(self):
        config = PreviewConfig()

        assert config.debounce_ms == 300
        assert config.diagram_min_length == 10

    def test_overrides(self):
        config = PreviewConfig.from_dict({
            "debounce_ms": 150,
            "diagram_min_length": 20,
            "typeset_delay_ms": 0,
            "highlight_style": "monokai",
            "math": {"macros": {"\\R": "\\mathbb{R}"}, "error_color": "red"},
        })

        assert config.debounce_ms == 150
        assert config.diagram_min_length == 20
        assert config.typeset_delay_ms == 0
        assert config.highlight_style == "monokai"
        assert config.math.macros == {"\\R": "\\mathbb{R}"}
        assert config.math.error_color == "red"

    @pytest.mark.parametrize("key", ["debounce_ms", "diagram_min_length", "typeset_delay_ms", "diagram_timeout_ms"])
    @pytest.mark.parametrize("value", [-1, "300", 1.5, True, None])
    def test_rejects_invalid_ints(self, key, value):
        with pytest.raises(ConfigError):
            PreviewConfig.from_dict({key: value})

    def test_rejects_non_mapping_math(self):
        with pytest.raises(ConfigError):
            PreviewConfig.from_dict({"math": ["x"]})

    def test_rejects_non_mapping_macros(self):
        with pytest.raises(ConfigError):
            PreviewConfig.from_dict({"math": {"macros": "\\RR"}})

    def test_is_immutable(self):
        config = PreviewConfig()

        with pytest.raises(AttributeError):
            config.debounce_ms = 1
