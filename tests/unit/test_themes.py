#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for themes and syntax highlighting."""
import logging

import pytest

from md2inline.highlight import default_style_name, highlight_code
from md2inline.renderers import StyledNode
from md2inline.themes import DEFAULT_THEME, THEME_TOKENS, THEMES, Theme, get_theme, list_themes, resolve_theme


@pytest.mark.unit
class TestThemeRegistry:
    """Test the built-in themes."""

    def test_builtin_names(self) -> None:
        """Test all seven themes are registered."""
        assert list_themes() == ["dark", "dracula", "github", "light", "mytheme", "nord", "sepia"]

    def test_light_palette(self) -> None:
        """Test one palette in full."""
        light = THEMES["light"]

        assert light.background == "#ffffff"
        assert light.text == "#333333"
        assert light.link == "#007bff"
        assert light.table_border == "#ddd"

    def test_every_theme_sets_every_token(self) -> None:
        """Test no theme leaves a token empty."""
        for theme in THEMES.values():
            assert all(getattr(theme, token) for token in THEME_TOKENS)

    def test_default_is_dark(self) -> None:
        """Test the default theme."""
        assert DEFAULT_THEME is THEMES["dark"]
        assert resolve_theme() is DEFAULT_THEME

    @pytest.mark.parametrize("name,dark", [("light", False), ("sepia", False), ("github", False), ("dark", True),
                                           ("nord", True), ("dracula", True), ("mytheme", True)])
    def test_is_dark(self, name: str, dark: bool) -> None:
        """Test brightness classification."""
        assert THEMES[name].is_dark is dark

    def test_lookup_ignores_case(self) -> None:
        """Test theme names are case-insensitive."""
        assert get_theme(" Nord ") is THEMES["nord"]
        assert get_theme("missing") is None


@pytest.mark.unit
class TestResolveTheme:
    """Test theme resolution."""

    def test_theme_instance_passthrough(self) -> None:
        """Test Theme objects are used as given."""
        custom = Theme("x", *["#000000"] * len(THEME_TOKENS))

        assert resolve_theme(custom) is custom

    def test_unknown_name_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown names fall back with a warning."""
        with caplog.at_level(logging.WARNING):
            theme = resolve_theme("neon")

        assert theme is DEFAULT_THEME
        assert "neon" in caplog.text

    def test_overrides_on_base(self) -> None:
        """Test overrides apply on top of the named base."""
        theme = resolve_theme({"base": "sepia", "link": "#123456"})

        assert theme.link == "#123456"
        assert theme.background == THEMES["sepia"].background
        assert theme.name == "sepia-custom"

    def test_unknown_override_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown override keys are ignored with a warning."""
        with caplog.at_level(logging.WARNING):
            theme = resolve_theme({"sparkle": "#fff"})

        assert theme == DEFAULT_THEME
        assert "sparkle" in caplog.text


@pytest.mark.unit
class TestHighlight:
    """Test inline-styled syntax highlighting."""

    def test_style_follows_theme_brightness(self) -> None:
        """Test dark themes pick a dark Pygments style."""
        assert default_style_name(THEMES["dark"]) == "monokai"
        assert default_style_name(THEMES["light"]) == "default"

    def test_known_language(self) -> None:
        """Test Python code gets colored spans and keeps its text."""
        code = "def greet(name):\n    return f'hi {name}'\n"
        result = highlight_code(code, "python", THEMES["light"])

        spans = [child for child in result if isinstance(child, StyledNode)]
        assert spans
        assert all(span.tag == "span" for span in spans)
        assert any("color" in span.style for span in spans)
        text = "".join(child if isinstance(child, str) else child.text for child in result)
        assert text == code

    @pytest.mark.parametrize("language", [None, "", "no-such-language"])
    def test_unknown_language_plain(self, language) -> None:
        """Test unknown or missing languages return the code unchanged."""
        assert highlight_code("x = 1", language, THEMES["dark"]) == ["x = 1"]

    def test_unknown_style_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a bad style name falls back to the theme default."""
        with caplog.at_level(logging.WARNING):
            result = highlight_code("x = 1", "python", THEMES["dark"], style_name="not-a-style")

        assert "not-a-style" in caplog.text
        assert any(isinstance(child, StyledNode) for child in result)
