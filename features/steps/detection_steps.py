import os
import time
from unittest.mock import patch

from behave import given, then, when

from termlight.color import AnsiColor
from termlight.core.detector import Detector
from termlight.exceptions import UnsupportedError
from termlight.sources.env import EnvSource
from termlight.sources.xterm import XtermSource
from tests.fakes import FakeTerminal


def _fake_terminal(context) -> FakeTerminal:
    terminal = FakeTerminal()
    context.stack.enter_context(terminal.installed())
    context.terminal = terminal
    return terminal


@given('COLORFGBG is "{value}"')
def step_colorfgbg_is(context, value: str) -> None:
    os.environ["COLORFGBG"] = value


@given("COLORFGBG is not set")
def step_colorfgbg_not_set(context) -> None:
    os.environ.pop("COLORFGBG", None)


@given("the terminal query is unavailable")
def step_terminal_query_unavailable(context) -> None:
    context.stack.enter_context(
        patch("termlight.core.detector.is_supported", return_value=False)
    )


@given('the terminal replies "{color}"')
def step_terminal_replies(context, color: str) -> None:
    terminal = _fake_terminal(context)
    terminal.reply(f"\x1b]11;{color}\x07\x1b[0n".encode())


@given("the terminal only answers the status probe")
def step_terminal_answers_status_only(context) -> None:
    terminal = _fake_terminal(context)
    terminal.reply(b"\x1b[0n")


@when("I detect the background color")
def step_detect(context) -> None:
    if context.terminal is not None:
        detector = Detector(
            sources=[
                XtermSource(2.0, context.terminal.input_fd, context.terminal.output_fd),
                EnvSource(),
            ]
        )
    else:
        detector = Detector()

    context.detection = None
    context.error = None
    start = time.monotonic()
    try:
        context.detection = detector.detect()
    except UnsupportedError as e:
        context.error = e
    context.elapsed = time.monotonic() - start


@then("the background color is ANSI {code:d}")
def step_color_is_ansi(context, code: int) -> None:
    assert context.detection.color == AnsiColor(code), context.detection


@then('the background color is RGB "{hex_color}"')
def step_color_is_rgb(context, hex_color: str) -> None:
    assert context.detection.color.hex == hex_color, context.detection


@then("the luma is below {value:f}")
def step_luma_below(context, value: float) -> None:
    assert context.detection.luma < value, context.detection.luma


@then("the luma is above {value:f}")
def step_luma_above(context, value: float) -> None:
    assert context.detection.luma > value, context.detection.luma


@then("detection took less than {seconds:d} second")
def step_detection_fast(context, seconds: int) -> None:
    assert context.elapsed < seconds, context.elapsed


@then("the terminal is back in its original mode")
def step_terminal_restored(context) -> None:
    assert context.terminal.mode == "cooked", context.terminal.mode


@then("detection fails as unsupported")
def step_detection_unsupported(context) -> None:
    assert context.detection is None
    assert isinstance(context.error, UnsupportedError)
