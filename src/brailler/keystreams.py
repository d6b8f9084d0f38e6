# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import codecs
import os
import sys
import termios
import tty
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable, AsyncIterator

import msgspec
import trio

from .commands import DotInput, Toggle, TypeText

if TYPE_CHECKING:
    from .mode import ModeState
    from .settings import Settings


class HostKey(msgspec.Struct, frozen=True):
    """A key the terminal host handles itself rather than passing to the Braille controller."""

    name: str


HOST_KEYS = {
    "\x7f": HostKey(name="backspace"),
    "\x08": HostKey(name="backspace"),
    "\x04": HostKey(name="quit"),
}


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: split raw terminal reads into single characters
class SingleCharacters(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[str], sink: trio.MemorySendChannel[str]):
        async with aclosing(source), aclosing(sink):
            async for chunk in source:
                for character in chunk:
                    await sink.send(character)


# stage 2: turn characters into commands. Dot keys only count as dots while Braille mode
# is on; otherwise they are ordinary typing.
class KeyCommands(Section):
    def __init__(self, settings: Settings, mode: ModeState):
        self.dot_keys = settings.dot_keys
        self.toggle_key = settings.toggle_key
        self.mode = mode

    async def pump(self, source: trio.MemoryReceiveChannel[str], sink: trio.MemorySendChannel[Any]):
        async with aclosing(source), aclosing(sink):
            async for key in source:
                if key == self.toggle_key:
                    await sink.send(Toggle())
                elif key in HOST_KEYS:
                    await sink.send(HOST_KEYS[key])
                elif self.mode.active and key in self.dot_keys:
                    await sink.send(DotInput(dot=int(self.dot_keys[key])))
                else:
                    await sink.send(TypeText(text=key))


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_keystream(source: AsyncIterable[str], settings: Settings, mode: ModeState):
    async with pump_all(source, SingleCharacters(), KeyCommands(settings, mode)) as keystream:
        yield keystream


async def terminal_keys() -> AsyncIterator[str]:
    """Yield text from stdin as it is typed, with the terminal in cbreak mode."""
    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    try:
        async with trio.lowlevel.FdStream(os.dup(fd)) as stdin:
            while True:
                data = await stdin.receive_some()
                if not data:
                    return
                text = decoder.decode(data)
                if text:
                    yield text
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
