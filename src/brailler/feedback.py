# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Audible confirmation of mode changes.

Purely decorative; nothing here may raise into the input path. The platform player is
chosen once, when the feedback player is made.
"""
from __future__ import annotations

import enum
import logging
import pathlib
import platform
import subprocess
import typing

import trio

if typing.TYPE_CHECKING:
    from .settings import Settings

logger = logging.getLogger(__name__)


@enum.unique
class FeedbackSound(enum.Enum):
    MODE_ON = "mode_on"
    MODE_OFF = "mode_off"


PLAYER_COMMANDS_BY_PLATFORM = {
    "Darwin": ("afplay", "{path}"),
    "Linux": ("paplay", "{path}"),
    "Windows": ("powershell", "-NoProfile", "-Command", "(New-Object Media.SoundPlayer '{path}').PlaySync()"),
}


def player_command_for(system: str) -> typing.Optional[tuple[str, ...]]:
    return PLAYER_COMMANDS_BY_PLATFORM.get(system)


class FeedbackPlayer(typing.Protocol):
    def play(self, sound: FeedbackSound) -> None: ...


class NullFeedback:
    def play(self, sound: FeedbackSound):
        pass


class ProcessFeedback:
    def __init__(self, nursery: trio.Nursery, sound_dir: pathlib.Path, command: tuple[str, ...]):
        self.nursery = nursery
        self.sound_dir = sound_dir
        self.command = command

    def argv_for(self, sound: FeedbackSound) -> list[str]:
        path = self.sound_dir / f"{sound.value}.wav"
        return [part.format(path=path) for part in self.command]

    def play(self, sound: FeedbackSound):
        self.nursery.start_soon(self._run, self.argv_for(sound))

    async def _run(self, argv: list[str]):
        try:
            await trio.run_process(argv, capture_stdout=True, capture_stderr=True)
        except (OSError, subprocess.CalledProcessError):
            logger.warning("Unable to play feedback sound with %r", argv, exc_info=True)


class FeedbackListener:
    def __init__(self, player: FeedbackPlayer):
        self.player = player

    def __call__(self, active: bool):
        self.player.play(FeedbackSound.MODE_ON if active else FeedbackSound.MODE_OFF)


def make_feedback(settings: Settings, nursery: trio.Nursery, system: typing.Optional[str] = None) -> FeedbackPlayer:
    if not settings.play_sounds or settings.sound_dir is None:
        return NullFeedback()
    if system is None:
        system = platform.system()
    command = player_command_for(system)
    if command is None:
        logger.info("No feedback sound player known for %s", system)
        return NullFeedback()
    return ProcessFeedback(nursery, settings.sound_dir, command)
