# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

import trio

from .chords import ChordAccumulator, CommitEngine, PendingCommit
from .commands import BrailleCommand, DotInput, Toggle, TypeText
from .commontypes import NoInsertionTarget
from .feedback import FeedbackListener
from .gate import InputGate
from .mode import ModeState

if typing.TYPE_CHECKING:
    from .document import InsertionTarget
    from .feedback import FeedbackPlayer
    from .indicator import StatusIndicator
    from .settings import Settings

logger = logging.getLogger(__name__)


class BrailleController:
    """Owns all Braille input state for one session and routes host commands to it."""

    def __init__(
        self,
        settings: Settings,
        target: InsertionTarget,
        *,
        indicator: typing.Optional[StatusIndicator] = None,
        feedback: typing.Optional[FeedbackPlayer] = None,
        type_text: typing.Optional[collections.abc.Callable[[str], None]] = None,
    ):
        self.settings = settings
        self.target = target
        self.mode = ModeState()
        self.accumulator = ChordAccumulator(self.mode)
        self.engine = CommitEngine(self.accumulator, target)
        self.gate = InputGate(self.mode)
        # accepted typed text goes down the host's ordinary typing path
        self.type_text = type_text if type_text is not None else target.insert_at_cursor
        self.indicator = indicator
        self.feedback = None
        if indicator is not None:
            self.mode.add_listener(indicator)
        if feedback is not None:
            self.set_feedback(feedback)
        self._nursery = None

    def set_feedback(self, feedback: FeedbackPlayer):
        if self.feedback is not None:
            self.mode.remove_listener(self.feedback)
        self.feedback = FeedbackListener(feedback)
        self.mode.add_listener(self.feedback)

    @property
    def active(self) -> bool:
        return self.mode.active

    async def run(self, *, task_status=trio.TASK_STATUS_IGNORED):
        try:
            async with trio.open_nursery() as nursery:
                self._nursery = nursery
                self.accumulator.bind(PendingCommit(nursery, self.settings.debounce_seconds, self.engine.commit))
                task_status.started()
                await trio.sleep_forever()
        finally:
            self.accumulator.unbind()
            self._nursery = None
            logger.debug("goodbye")

    def toggle(self) -> bool:
        active = self.mode.toggle()
        if not active and self.settings.clear_chord_on_deactivate:
            self.accumulator.discard()
        return active

    def handle(self, command: BrailleCommand):
        match command:
            case Toggle():
                self.toggle()
            case DotInput(dot=dot):
                self.accumulator.receive(dot)
            case TypeText(text=text):
                self.gate.handle(text, self._forward_typed_text)
            case _:
                raise NotImplementedError(f"Don't know how to handle {type(command)}.")

    def _forward_typed_text(self, text: str):
        try:
            self.type_text(text)
        except NoInsertionTarget:
            logger.debug("No insertion target; dropping typed text %r", text)

    async def dispatch_commands(
        self,
        receive_channel: trio.MemoryReceiveChannel[BrailleCommand],
        *,
        task_status=trio.TASK_STATUS_IGNORED,
    ):
        task_status.started()
        async with receive_channel:
            async for command in receive_channel:
                self.handle(command)
