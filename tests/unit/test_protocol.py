"""Tests for the terminal query encoding and reply parsing."""

import pytest

from termlight.color import RgbColor
from termlight.exceptions import ReplyParseError
from termlight.sources.protocol import (
    BACKGROUND,
    STATUS,
    encode_background_query,
    encode_status_probe,
    match_reply,
    parse_background_reply,
    parse_status_reply,
    scale_channel,
)


def background_reply(r: int, g: int, b: int, terminator: bytes = b"\x07") -> bytes:
    """Build the reply xterm sends for a background color."""
    body = f"rgb:{r * 257:04x}/{g * 257:04x}/{b * 257:04x}".encode()
    return b"\x1b]11;" + body + terminator


class TestEncoding:
    """Tests for outbound query bytes."""

    def test_background_query(self) -> None:
        assert encode_background_query() == b"\x1b]11;?\x07"

    def test_status_probe(self) -> None:
        assert encode_status_probe() == b"\x1b[5n"


class TestParseBackgroundReply:
    """Tests for OSC 11 reply parsing."""

    @pytest.mark.parametrize(
        "color", [(0, 0, 0), (255, 255, 255), (30, 30, 46), (253, 246, 227), (1, 128, 254)]
    )
    def test_xterm_reply_recovers_channels(self, color: tuple[int, int, int]) -> None:
        assert parse_background_reply(background_reply(*color)) == RgbColor(*color)

    def test_string_terminator(self) -> None:
        reply = background_reply(40, 42, 54, terminator=b"\x1b\\")

        assert parse_background_reply(reply) == RgbColor(40, 42, 54)

    def test_four_digit_channels_keep_high_byte(self) -> None:
        reply = b"\x1b]11;rgb:1e2f/ffff/00ff\x07"

        assert parse_background_reply(reply) == RgbColor(0x1E, 0xFF, 0x00)

    def test_two_digit_channels(self) -> None:
        assert parse_background_reply(b"\x1b]11;rgb:1e/1e/2e\x07") == RgbColor(30, 30, 46)

    def test_uppercase_hex(self) -> None:
        assert parse_background_reply(b"\x1b]11;rgb:FFFF/8080/0000\x07") == RgbColor(255, 128, 0)

    def test_rgba_ignores_alpha(self) -> None:
        reply = b"\x1b]11;rgba:2828/2a2a/3636/ffff\x07"

        assert parse_background_reply(reply) == RgbColor(40, 42, 54)

    @pytest.mark.parametrize(
        "reply",
        [
            b"",
            b"\x1b]11;rgb:0000/0000",
            b"\x1b]11;rgb:0000/0000/0000",
            b"\x1b]10;rgb:0000/0000/0000\x07",
            b"]11;rgb:0000/0000/0000\x07",
            b"\x1b]11;rgb:0000/0000/0000\x1b",
            b"\x1b]11;rgb:0000/0000\x07",
            b"\x1b]11;rgb:0000/0000/0000/0000\x07",
            b"\x1b]11;rgb:00000/0000/0000\x07",
            b"\x1b]11;rgb:zzzz/0000/0000\x07",
            b"\x1b]11;#000000\x07",
            b"\x1b]11;?\x07",
            b"\x1b]11;rgb:0000/0000/0000\x07trailing",
        ],
    )
    def test_rejects_malformed_replies(self, reply: bytes) -> None:
        with pytest.raises(ReplyParseError):
            parse_background_reply(reply)


class TestScaleChannel:
    """Tests for hex channel reduction to 8 bits."""

    @pytest.mark.parametrize(
        ("digits", "expected"),
        [
            ("f", 255),
            ("8", 136),
            ("ff", 255),
            ("80", 128),
            ("fff", 255),
            ("800", 128),
            ("ffff", 255),
            ("8000", 128),
        ],
    )
    def test_widths(self, digits: str, expected: int) -> None:
        assert scale_channel(digits) == expected


class TestParseStatusReply:
    """Tests for Device Status Report reply recognition."""

    def test_ok_status(self) -> None:
        assert parse_status_reply(b"\x1b[0n") is True

    def test_other_status_code(self) -> None:
        assert parse_status_reply(b"\x1b[3n") is True

    @pytest.mark.parametrize("data", [b"\x1b[0", b"\x1b[n", b"\x1b[12;4R", b"\x1b]11;?\x07"])
    def test_rejects_other_sequences(self, data: bytes) -> None:
        assert parse_status_reply(data) is False


class TestMatchReply:
    """Tests for finding the winning reply in the accumulated input."""

    def test_nothing_complete_yet(self) -> None:
        assert match_reply(b"") is None
        assert match_reply(b"\x1b]11;rgb:1e1e/1e1e") is None
        assert match_reply(b"\x1b[0") is None

    def test_background_reply_before_status(self) -> None:
        buffer = background_reply(1, 2, 3) + b"\x1b[0n"

        reply = match_reply(buffer)

        assert reply.kind == BACKGROUND
        assert reply.start == 0
        assert parse_background_reply(reply.data) == RgbColor(1, 2, 3)

    def test_status_reply_alone(self) -> None:
        reply = match_reply(b"\x1b[0n")

        assert reply.kind == STATUS
        assert reply.data == b"\x1b[0n"

    def test_status_reply_before_background(self) -> None:
        buffer = b"\x1b[0n" + background_reply(1, 2, 3)

        assert match_reply(buffer).kind == STATUS

    def test_skips_unrelated_leading_bytes(self) -> None:
        buffer = b"jk\x1b[A" + background_reply(9, 9, 9)

        reply = match_reply(buffer)

        assert reply.kind == BACKGROUND
        assert reply.start == 5

    def test_malformed_background_reply_still_matches(self) -> None:
        reply = match_reply(b"\x1b]11;bogus\x07\x1b[0n")

        assert reply.kind == BACKGROUND
        with pytest.raises(ReplyParseError):
            parse_background_reply(reply.data)
