"""Tests for the COLORFGBG fallback."""

import pytest

from termlight.color import AnsiColor
from termlight.exceptions import ReplyParseError, UnsupportedError
from termlight.sources.env import EnvSource, env_background_color, parse_colorfgbg


class TestEnvBackgroundColor:
    """Tests for reading the background index from the environment."""

    def test_dark_background(self) -> None:
        assert env_background_color({"COLORFGBG": "15;0"}) == AnsiColor(0)

    def test_light_background(self) -> None:
        assert env_background_color({"COLORFGBG": "7;15"}) == AnsiColor(15)

    def test_unset_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedError):
            env_background_color({})

    def test_empty_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedError):
            env_background_color({"COLORFGBG": ""})

    def test_non_numeric_field_is_parse_error(self) -> None:
        with pytest.raises(ReplyParseError) as exc_info:
            env_background_color({"COLORFGBG": "abc;0"})

        assert exc_info.value.kind == "parse"
        assert exc_info.value.raw == "abc;0"

    def test_reads_process_environment_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COLORFGBG", "0;15")

        assert env_background_color() == AnsiColor(15)

    def test_custom_variable_name(self) -> None:
        environ = {"MY_COLORS": "15;4", "COLORFGBG": "0;15"}

        assert env_background_color(environ, var_name="MY_COLORS") == AnsiColor(4)


class TestParseColorfgbg:
    """Tests for the <fg>;<bg> parser."""

    @pytest.mark.parametrize(
        "value",
        [
            "15",
            "15;default;0",
            "15;0;",
            ";0",
            "15;",
            "15;-1",
            "15;256",
            "15;0x0f",
            "15;1.5",
        ],
    )
    def test_rejects_malformed_values(self, value: str) -> None:
        with pytest.raises(ReplyParseError):
            parse_colorfgbg(value)

    def test_accepts_full_byte_range(self) -> None:
        assert parse_colorfgbg("0;255") == AnsiColor(255)

    def test_tolerates_surrounding_spaces(self) -> None:
        assert parse_colorfgbg(" 15 ; 0 ") == AnsiColor(0)


class TestEnvSource:
    """Tests for the environment strategy object."""

    def test_query_reads_injected_environment(self) -> None:
        source = EnvSource(environ={"COLORFGBG": "12;8"})

        assert source.name == "env"
        assert source.query() == AnsiColor(8)

    def test_query_reads_environment_at_call_time(self, monkeypatch: pytest.MonkeyPatch) -> None:
        source = EnvSource()
        monkeypatch.setenv("COLORFGBG", "15;0")

        assert source.query() == AnsiColor(0)
