# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import io

import pytest

from brailler.app import TerminalView
from brailler.commontypes import NoInsertionTarget
from brailler.document import TextDocument, Workspace
from brailler.indicator import indicator_state


def test_insert_at_cursor():
    doc = TextDocument("ac", cursor=1)
    doc.insert_at_cursor("b")
    assert doc.text == "abc"
    assert doc.cursor == 2
    assert doc.unsaved_changes


def test_backspace_and_cursor_movement():
    doc = TextDocument("⠁⠃")
    doc.backspace()
    assert doc.text == "⠁"
    doc.move_cursor(-5)
    assert doc.cursor == 0
    doc.backspace()
    assert doc.text == "⠁"
    doc.move_cursor(10)
    assert doc.cursor == 1


def test_cursor_must_be_inside():
    with pytest.raises(ValueError):
        TextDocument("a", cursor=3)


def test_workspace_without_document():
    workspace = Workspace()
    with pytest.raises(NoInsertionTarget):
        workspace.insert_at_cursor("⠁")
    workspace.active = TextDocument()
    workspace.insert_at_cursor("⠁")
    assert workspace.active.text == "⠁"


def test_terminal_view():
    out = io.StringIO()
    view = TerminalView(Workspace(TextDocument("first\n")), out=out)
    view.set_status(indicator_state(True))
    view.insert_at_cursor("⠃")
    assert out.getvalue().endswith("[⠿ Braille Mode: ON] ⠃")
    view.backspace()
    assert out.getvalue().endswith("[⠿ Braille Mode: ON] ")
