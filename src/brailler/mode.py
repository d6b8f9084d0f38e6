# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import logging

import trio_util

logger = logging.getLogger(__name__)

ModeListener = collections.abc.Callable[[bool], None]


class ModeState:
    """The on/off switch for Braille input.

    The flag starts off, is never saved, and only changes through toggle(). Listeners
    are called synchronously from toggle(), so anything consulting the flag afterwards
    already sees the new value.
    """

    listeners: list[ModeListener]

    def __init__(self):
        self.flag = trio_util.AsyncBool(False)
        self.listeners = []

    @property
    def active(self) -> bool:
        return self.flag.value

    def add_listener(self, listener: ModeListener):
        self.listeners.append(listener)

    def remove_listener(self, listener: ModeListener):
        self.listeners.remove(listener)

    def toggle(self) -> bool:
        self.flag.value = not self.flag.value
        logger.debug("Braille mode %s", "on" if self.flag.value else "off")
        for listener in list(self.listeners):
            listener(self.flag.value)
        return self.flag.value
