# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging

import pytest
import trio
import trio.testing

from brailler.chords import ChordAccumulator, CommitEngine, PendingCommit
from brailler.commontypes import BraillerError, NoInsertionTarget
from brailler.mode import ModeState

pytestmark = pytest.mark.trio

DEBOUNCE = 0.1


class RecordingTarget:
    def __init__(self):
        self.inserted = []

    def insert_at_cursor(self, text):
        self.inserted.append(text)


class MissingTarget:
    def __init__(self):
        self.attempts = 0

    def insert_at_cursor(self, text):
        self.attempts += 1
        raise NoInsertionTarget()


def make_chording(nursery, target, active=True):
    mode = ModeState()
    if active:
        mode.toggle()
    accumulator = ChordAccumulator(mode)
    engine = CommitEngine(accumulator, target)
    accumulator.bind(PendingCommit(nursery, DEBOUNCE, engine.commit))
    return mode, accumulator, engine


async def test_pending_commit_fires_once(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    calls = []
    pending = PendingCommit(nursery, DEBOUNCE, lambda: calls.append(trio.current_time()))
    pending.reschedule()
    pending.reschedule()
    await trio.sleep(0.05)
    pending.reschedule()
    assert pending.scheduled
    await trio.sleep(1)
    assert calls == [pytest.approx(0.15)]
    assert not pending.scheduled


async def test_pending_commit_cancel(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    calls = []
    pending = PendingCommit(nursery, DEBOUNCE, lambda: calls.append(True))
    pending.reschedule()
    await trio.sleep(0.05)
    pending.cancel()
    pending.cancel()
    assert not pending.scheduled
    await trio.sleep(1)
    assert calls == []


async def test_pending_commit_clears_before_callback(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    seen = []
    pending = PendingCommit(nursery, DEBOUNCE, lambda: seen.append(pending.scheduled))
    pending.reschedule()
    await trio.sleep(1)
    assert seen == [False]


async def test_presses_within_window_make_one_cell(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    target = RecordingTarget()
    _, accumulator, engine = make_chording(nursery, target)
    accumulator.receive(1)
    await trio.sleep(0.05)
    accumulator.receive(2)
    assert accumulator.pending_chord == 3
    await trio.sleep(1)
    assert target.inserted == ["⠃"]
    assert engine.last_committed == "⠃"
    assert accumulator.pending_chord == 0
    assert not accumulator.pending.scheduled


async def test_all_six_dots(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    target = RecordingTarget()
    _, accumulator, _ = make_chording(nursery, target)
    for dot in (32, 1, 16, 2, 8, 4):
        accumulator.receive(dot)
        await trio.sleep(0.09)
    await trio.sleep(1)
    assert target.inserted == ["⠿"]


async def test_presses_outside_window_make_separate_cells(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    target = RecordingTarget()
    _, accumulator, _ = make_chording(nursery, target)
    accumulator.receive(1)
    await trio.sleep(0.2)
    assert target.inserted == ["⠁"]
    accumulator.receive(2)
    await trio.sleep(0.2)
    assert target.inserted == ["⠁", "⠂"]


async def test_repeated_dot_is_idempotent(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    target = RecordingTarget()
    _, accumulator, _ = make_chording(nursery, target)
    accumulator.receive(1)
    accumulator.receive(1)
    assert accumulator.pending_chord == 1
    await trio.sleep(1)
    assert target.inserted == ["⠁"]


async def test_inactive_mode_ignores_presses(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    target = RecordingTarget()
    _, accumulator, _ = make_chording(nursery, target, active=False)
    accumulator.receive(1)
    assert accumulator.pending_chord == 0
    assert not accumulator.pending.scheduled
    await trio.sleep(1)
    assert target.inserted == []


async def test_unknown_dot_values_are_ignored(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock, caplog: pytest.LogCaptureFixture):
    target = RecordingTarget()
    _, accumulator, _ = make_chording(nursery, target)
    with caplog.at_level(logging.WARNING, logger="brailler.chords"):
        for value in (0, 3, 64, True, "1"):
            accumulator.receive(value)
    assert accumulator.pending_chord == 0
    assert not accumulator.pending.scheduled
    assert len(caplog.records) == 5
    await trio.sleep(1)
    assert target.inserted == []


async def test_missing_target_still_resets(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    target = MissingTarget()
    _, accumulator, engine = make_chording(nursery, target)
    accumulator.receive(4)
    await trio.sleep(1)
    assert target.attempts == 1
    assert accumulator.pending_chord == 0
    assert not accumulator.pending.scheduled
    assert engine.last_committed is None

    accumulator.receive(8)
    assert accumulator.pending_chord == 8
    await trio.sleep(1)
    assert target.attempts == 2


async def test_commit_with_nothing_pending_is_noop(nursery: trio.Nursery):
    target = RecordingTarget()
    _, _, engine = make_chording(nursery, target)
    engine.commit()
    assert target.inserted == []


async def test_discard(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    target = RecordingTarget()
    _, accumulator, _ = make_chording(nursery, target)
    accumulator.receive(1)
    accumulator.discard()
    assert accumulator.pending_chord == 0
    await trio.sleep(1)
    assert target.inserted == []


async def test_receive_needs_a_timer():
    mode = ModeState()
    mode.toggle()
    accumulator = ChordAccumulator(mode)
    with pytest.raises(BraillerError):
        accumulator.receive(1)
