"""Behave environment configuration for termlight features."""

import logging
import os
import sys
from contextlib import ExitStack
from pathlib import Path

from behave.model import Scenario
from behave.runner import Context

repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

logger = logging.getLogger(__name__)


def before_scenario(context: Context, scenario: Scenario) -> None:
    """Save COLORFGBG and reset per-scenario state."""
    context.original_colorfgbg = os.environ.get("COLORFGBG")
    context.terminal = None
    context.stack = ExitStack()


def after_scenario(context: Context, scenario: Scenario) -> None:
    """Restore COLORFGBG, undo patches and close the fake terminal."""
    context.stack.close()

    if context.terminal is not None:
        context.terminal.close()

    if context.original_colorfgbg is None:
        os.environ.pop("COLORFGBG", None)
    else:
        os.environ["COLORFGBG"] = context.original_colorfgbg

    logger.debug("Finished scenario: %s", scenario.name)
