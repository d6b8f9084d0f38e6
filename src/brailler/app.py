# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from contextlib import aclosing
from typing import Optional

import trio

from .commands import DotInput, Toggle, TypeText
from .controller import BrailleController
from .document import TextDocument, Workspace
from .feedback import make_feedback
from .indicator import IndicatorState, StatusIndicator
from .keystreams import HostKey, make_keystream, terminal_keys
from .settings import Settings

logger = logging.getLogger(__name__)


class TerminalView:
    """Shows the status indicator and the active document on a single terminal line."""

    def __init__(self, workspace: Workspace, out=None):
        self.workspace = workspace
        self.out = out if out is not None else sys.stdout
        self.status: Optional[IndicatorState] = None

    def set_status(self, status: IndicatorState):
        self.status = status
        self.redraw()

    def insert_at_cursor(self, text: str):
        self.workspace.insert_at_cursor(text)
        self.redraw()

    def backspace(self):
        if self.workspace.active is not None:
            self.workspace.active.backspace()
        self.redraw()

    def redraw(self):
        status = self.status.text if self.status is not None else ""
        document = self.workspace.active.text if self.workspace.active is not None else ""
        # only the last line of the document fits
        last_line = document.rsplit("\n", 1)[-1]
        self.out.write(f"\r\x1b[K[{status}] {last_line}")
        self.out.flush()


async def run_terminal(settings: Settings, workspace: Workspace):
    view = TerminalView(workspace)
    async with trio.open_nursery() as nursery:
        controller = BrailleController(
            settings,
            view,
            indicator=StatusIndicator(view.set_status),
            feedback=make_feedback(settings, nursery),
        )
        await nursery.start(controller.run)
        async with aclosing(terminal_keys()) as keys, make_keystream(keys, settings, controller.mode) as keystream:
            async for event in keystream:
                match event:
                    case HostKey(name="quit"):
                        break
                    case HostKey(name="backspace"):
                        view.backspace()
                    case Toggle() | DotInput() | TypeText():
                        controller.handle(event)
        nursery.cancel_scope.cancel()
    view.out.write("\n")


parser = argparse.ArgumentParser(prog="brailler", description="Type six-dot Braille cells as key chords.")
parser.add_argument("--settings", type=pathlib.Path, help="JSON settings file; defaults are used if omitted")
parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")


def main(argv=sys.argv):
    parsed = parser.parse_args(argv[1:])
    logging.basicConfig(level=logging.DEBUG if parsed.verbose else logging.INFO)
    if parsed.settings is not None:
        settings = Settings.load(parsed.settings)
    else:
        settings = Settings.default()
    workspace = Workspace(TextDocument())
    trio.run(run_terminal, settings, workspace)
    print(workspace.active.text)
    return 0
