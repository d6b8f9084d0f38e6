# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later


class BraillerError(Exception):
    pass


class InvalidDot(BraillerError, ValueError):
    def __init__(self, value):
        super().__init__(f"{value!r} is not a Braille dot; expected one of 1, 2, 4, 8, 16, 32")
        self.value = value


class InvalidChord(BraillerError, ValueError):
    pass


class NoInsertionTarget(BraillerError):
    pass


class UnknownCommand(BraillerError, KeyError):
    pass


class SettingsError(BraillerError):
    pass
