import pytest

from gamesense.core.config import (
    WindowConfig, TabConfig, SliderConfig, ToggleConfig, TextboxConfig,
    resolve_config,
)


def test_window_defaults():
    cfg = WindowConfig()
    assert cfg.name == "GamesenseUI"
    assert cfg.size == (500.0, 350.0)
    assert cfg.position is None
    assert cfg.auto_activate_first_tab is True


def test_window_rejects_non_positive_size():
    with pytest.raises(ValueError):
        WindowConfig(size=(0, 350))
    with pytest.raises(ValueError):
        WindowConfig(size=(500, -1))


def test_slider_defaults():
    cfg = SliderConfig()
    assert cfg.min_value == 0
    assert cfg.max_value == 100
    assert cfg.increment == 1
    assert cfg.current_value is None
    assert cfg.suffix == ""


def test_slider_rejects_inverted_range():
    with pytest.raises(ValueError):
        SliderConfig(range=(10, 0))


def test_slider_rejects_bad_increment():
    with pytest.raises(ValueError):
        SliderConfig(increment=0)
    with pytest.raises(ValueError):
        SliderConfig(increment=-5)


def test_slider_allows_degenerate_range():
    cfg = SliderConfig(range=(5, 5))
    assert cfg.min_value == cfg.max_value == 5


def test_textbox_defaults():
    cfg = TextboxConfig()
    assert cfg.placeholder == ""
    assert cfg.current_value == ""
    assert cfg.clear_on_focus_lost is False


def test_resolve_from_fields():
    cfg = resolve_config(TabConfig, name="Visuals", icon="V")
    assert cfg == TabConfig(name="Visuals", icon="V")


def test_resolve_passes_config_through():
    given = ToggleConfig(name="Enabled", current_value=True)
    assert resolve_config(ToggleConfig, given) is given


def test_resolve_rejects_config_and_fields():
    with pytest.raises(TypeError):
        resolve_config(ToggleConfig, ToggleConfig(), name="Other")


def test_resolve_rejects_wrong_config_type():
    with pytest.raises(TypeError):
        resolve_config(ToggleConfig, TabConfig())


def test_resolve_rejects_unknown_field():
    with pytest.raises(TypeError):
        resolve_config(TabConfig, colour="red")
