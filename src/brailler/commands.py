# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum
import typing

import msgspec

from .commontypes import UnknownCommand


class Toggle(msgspec.Struct, frozen=True):
    pass


class DotInput(msgspec.Struct, frozen=True):
    dot: int


class TypeText(msgspec.Struct, frozen=True):
    text: str


BrailleCommand = Toggle | DotInput | TypeText


@enum.unique
class Command(enum.Enum):
    TOGGLE = "brailler.toggle"
    INPUT = "brailler.input"
    TYPE = "type"


def command_from_host(name: str, arg: typing.Any = None) -> BrailleCommand:
    """Translate a host's name-based command invocation.

    TYPE takes either the text itself or a mapping with a "text" entry, which is what
    editors hand to their type handlers.
    """
    try:
        command = Command(name)
    except ValueError:
        raise UnknownCommand(name) from None
    match command:
        case Command.TOGGLE:
            return Toggle()
        case Command.INPUT:
            return DotInput(dot=arg)
        case Command.TYPE:
            if isinstance(arg, dict):
                arg = arg.get("text", "")
            return TypeText(text=arg)
