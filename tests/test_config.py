"""Tests for ContextVar-based map configuration."""

from threading import Thread

import pytest

from mdpatch import (
    MapConfig,
    build_map,
    get_map_config,
    map_config_context,
    reset_map_config,
    set_map_config,
)

CARET = "^note\nbody\n"


class TestMapConfigDataclass:
    """MapConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = MapConfig()
        assert config.max_heading_level == 6
        assert config.block_prefix == "<!--block:"
        assert config.block_suffix == "-->"
        assert config.duplicate_policy == "reject"

    def test_immutability(self) -> None:
        config = MapConfig()
        with pytest.raises(AttributeError):
            config.duplicate_policy = "last_wins"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_heading_level": 0},
            {"block_prefix": ""},
            {"duplicate_policy": "first_wins"},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            MapConfig(**kwargs)

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = MapConfig.from_dict({"duplicate_policy": "last_wins", "unknown": 1})
        assert config.duplicate_policy == "last_wins"

    def test_for_block_style(self) -> None:
        config = MapConfig.for_block_style("caret", duplicate_policy="last_wins")
        assert config.block_prefix == "^"
        assert config.block_suffix == ""
        assert config.duplicate_policy == "last_wins"

    def test_unknown_block_style(self) -> None:
        with pytest.raises(ValueError):
            MapConfig.for_block_style("brackets")


class TestContextVarFunctions:
    """get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_map_config()

    def test_default_config(self) -> None:
        assert get_map_config() == MapConfig()

    def test_set_and_reset(self) -> None:
        set_map_config(MapConfig.for_block_style("caret"))
        assert "note" in build_map(CARET).blocks
        reset_map_config()
        assert "note" not in build_map(CARET).blocks

    def test_explicit_config_wins(self) -> None:
        set_map_config(MapConfig.for_block_style("caret"))
        assert build_map(CARET, MapConfig()).blocks == {}


class TestContextManager:
    """map_config_context behavior."""

    def test_restores_previous(self) -> None:
        with map_config_context(MapConfig(duplicate_policy="last_wins")):
            assert get_map_config().duplicate_policy == "last_wins"
        assert get_map_config().duplicate_policy == "reject"

    def test_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with map_config_context(MapConfig(duplicate_policy="last_wins")):
                raise RuntimeError("boom")
        assert get_map_config() == MapConfig()


class TestThreadIsolation:
    """Config set in one thread is invisible to others."""

    def test_thread_change_does_not_leak(self) -> None:
        def worker() -> None:
            set_map_config(MapConfig(duplicate_policy="last_wins"))

        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert get_map_config().duplicate_policy == "reject"
