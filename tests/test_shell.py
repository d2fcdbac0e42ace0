import pytest

pytest.importorskip("PySide6.QtWidgets")

from sitefx.ui.shell import LINKS, PALETTES, stylesheet_for  # noqa: E402


def _luminance(color: str) -> float:
    channels = []
    for i in (1, 3, 5):
        c = int(color[i : i + 2], 16) / 255
        channels.append(c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4)
    r, g, b = channels
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def _contrast(a: str, b: str) -> float:
    hi, lo = sorted((_luminance(a), _luminance(b)), reverse=True)
    return (hi + 0.05) / (lo + 0.05)


@pytest.mark.parametrize("theme", sorted(PALETTES))
def test_spark_colors_visible_on_link_surface(theme):
    surface = PALETTES[theme]["surface"]
    for label, color in LINKS:
        assert _contrast(color, surface) >= 3.0, label


def test_stylesheet_uses_palette_surface():
    assert PALETTES["light"]["surface"] in stylesheet_for("light")
    assert PALETTES["dark"]["surface"] in stylesheet_for("dark")
