# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

from .commontypes import NoInsertionTarget

logger = logging.getLogger(__name__)


class InsertionTarget(typing.Protocol):
    def insert_at_cursor(self, text: str) -> None: ...


# A document has exactly one cursor. Multiple selections are the host editor's business;
# we only ever insert at the primary insertion point.
class TextDocument:
    def __init__(self, text: str = "", cursor: typing.Optional[int] = None):
        self.text = text
        self.cursor = len(text) if cursor is None else cursor
        if not 0 <= self.cursor <= len(self.text):
            raise ValueError(f"cursor {self.cursor} is outside the document")
        self.unsaved_changes = False

    def __len__(self):
        return len(self.text)

    def insert_at_cursor(self, text: str):
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)
        self.unsaved_changes = True

    def backspace(self):
        if self.cursor == 0:
            # no going back
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        self.unsaved_changes = True

    def move_cursor(self, offset: int):
        self.cursor = max(0, min(len(self.text), self.cursor + offset))


class Workspace:
    """The set of open documents, at most one of which is active."""

    active: typing.Optional[TextDocument]

    def __init__(self, active: typing.Optional[TextDocument] = None):
        self.active = active

    def insert_at_cursor(self, text: str):
        if self.active is None:
            raise NoInsertionTarget()
        self.active.insert_at_cursor(text)
