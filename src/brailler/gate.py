# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import logging
import typing

from .mode import ModeState

logger = logging.getLogger(__name__)


def is_whitespace(text: str) -> bool:
    return len(text) > 0 and text.isspace()


class InputGate:
    """Decides whether ordinary typed text reaches the document.

    While Braille mode is on, the dot keys arrive here too as plain characters; only
    whitespace is let through so the writer can still break lines and space cells.
    """

    def __init__(self, mode: ModeState):
        self.mode = mode

    def filter_typed_text(self, text: str) -> typing.Optional[str]:
        if not self.mode.active:
            return text
        if is_whitespace(text):
            return text
        logger.debug("Dropping typed text %r while Braille mode is on", text)
        return None

    def handle(self, text: str, forward: collections.abc.Callable[[str], None]):
        accepted = self.filter_typed_text(text)
        if accepted is not None:
            forward(accepted)
