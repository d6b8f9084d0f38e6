# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Chord accumulation and the debounced commit.

Dot presses carry no release information, so the only way to know a chord is finished
is silence: every press restarts a short timer, and when the timer runs out the union
of everything pressed so far becomes one Braille cell.
"""
from __future__ import annotations

import collections.abc
import logging
import typing

import trio

from .cells import chord_to_cell, coerce_dot, dots_of
from .commontypes import BraillerError, InvalidDot, NoInsertionTarget

if typing.TYPE_CHECKING:
    from .document import InsertionTarget
    from .mode import ModeState

logger = logging.getLogger(__name__)


class PendingCommit:
    """A single replaceable scheduled call.

    reschedule() drops whatever was scheduled before and starts over, so the callback
    runs once, delay seconds after the most recent reschedule(), unless cancel() comes
    first.
    """

    _cancel_scope: typing.Optional[trio.CancelScope]

    def __init__(self, nursery: trio.Nursery, delay: float, callback: collections.abc.Callable[[], None]):
        self.nursery = nursery
        self.delay = delay
        self.callback = callback
        self._cancel_scope = None

    @property
    def scheduled(self) -> bool:
        return self._cancel_scope is not None

    def cancel(self):
        if self._cancel_scope is not None:
            self._cancel_scope.cancel()
            self._cancel_scope = None

    def reschedule(self):
        self.cancel()
        # a scope cancelled before the task enters it still takes effect on entry
        cancel_scope = trio.CancelScope()
        self._cancel_scope = cancel_scope
        self.nursery.start_soon(self._fire, cancel_scope)

    async def _fire(self, cancel_scope: trio.CancelScope):
        with cancel_scope:
            await trio.sleep(self.delay)
            if self._cancel_scope is cancel_scope:
                self._cancel_scope = None
                self.callback()


class ChordAccumulator:
    chord: int
    pending: typing.Optional[PendingCommit]

    def __init__(self, mode: ModeState):
        self.mode = mode
        self.chord = 0
        self.pending = None

    def bind(self, pending: PendingCommit):
        if self.pending is not None:
            self.pending.cancel()
        self.pending = pending

    def unbind(self):
        self.discard()
        self.pending = None

    @property
    def pending_chord(self) -> int:
        return self.chord

    def receive(self, dot: typing.Any):
        if not self.mode.active:
            logger.debug("Ignoring dot %r while Braille mode is off", dot)
            return
        try:
            dot = coerce_dot(dot)
        except InvalidDot:
            logger.warning("Ignoring press of unknown dot value %r", dot)
            return
        if self.pending is None:
            raise BraillerError("chord timer is not running")
        self.chord |= dot
        self.pending.reschedule()

    def take(self) -> int:
        chord = self.chord
        self.chord = 0
        if self.pending is not None:
            self.pending.cancel()
        return chord

    def discard(self):
        chord = self.take()
        if chord:
            logger.debug("Discarded pending chord with dots %s", dots_of(chord))


class CommitEngine:
    last_committed: typing.Optional[str]

    def __init__(self, accumulator: ChordAccumulator, target: InsertionTarget):
        self.accumulator = accumulator
        self.target = target
        self.last_committed = None

    def commit(self):
        # state is cleared before the insertion is requested, whatever happens to it
        chord = self.accumulator.take()
        if chord == 0:
            return
        cell = chord_to_cell(chord)
        try:
            self.target.insert_at_cursor(cell)
        except NoInsertionTarget:
            logger.debug("No insertion target; dropping %s", cell)
            return
        logger.debug("Committed %s (dots %s)", cell, dots_of(chord))
        self.last_committed = cell
