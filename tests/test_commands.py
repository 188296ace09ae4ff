"""Tests for deferred commands."""

import asyncio
import time

from velm.commands import Delay, EmitMessage, ParseCommandLine
from velm.messages import ClearStatusMessage, EnterMode, Quit, Save, SaveAs
from velm.mode import Normal


def test_emit_message_returns_its_message():
    assert asyncio.run(EmitMessage(Quit()).execute()) == Quit()


def test_parse_command_line():
    assert asyncio.run(ParseCommandLine("q").execute()) == Quit()
    assert asyncio.run(ParseCommandLine("w").execute()) == Save()
    assert asyncio.run(ParseCommandLine("w out.txt").execute()) == SaveAs("out.txt")


def test_unknown_command_returns_to_normal_mode():
    assert asyncio.run(ParseCommandLine("wq").execute()) == EnterMode(Normal())


def test_delay_waits_before_producing_message():
    start = time.monotonic()
    message = asyncio.run(Delay(0.05, ClearStatusMessage("x")).execute())
    assert message == ClearStatusMessage("x")
    assert time.monotonic() - start >= 0.04
