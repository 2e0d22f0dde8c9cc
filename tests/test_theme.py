from core.helpers import DARK_COLORS, LIGHT_COLORS, theme_css


def test_dark_theme_css_uses_dark_palette():
    css = theme_css(True)
    assert DARK_COLORS["background"] in css
    assert LIGHT_COLORS["background"] not in css


def test_light_theme_css_uses_light_palette():
    css = theme_css(False)
    assert LIGHT_COLORS["background"] in css
    assert DARK_COLORS["background"] not in css


def test_theme_follows_saved_preference(preferences):
    assert theme_css(preferences.is_dark_mode()) == theme_css(False)
    preferences.toggle_theme()
    assert theme_css(preferences.is_dark_mode()) == theme_css(True)
