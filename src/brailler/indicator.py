# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import typing

import msgspec


class IndicatorState(msgspec.Struct, frozen=True):
    text: str
    tooltip: str
    highlighted: bool = False


ACTIVE_INDICATOR = IndicatorState(text="⠿ Braille Mode: ON", tooltip="Click to disable Braille Input", highlighted=True)
INACTIVE_INDICATOR = IndicatorState(text="⠀ Braille Mode: OFF", tooltip="Click to enable Braille Input")


def indicator_state(active: bool) -> IndicatorState:
    return ACTIVE_INDICATOR if active else INACTIVE_INDICATOR


class StatusIndicator:
    current: IndicatorState

    def __init__(self, render: typing.Optional[collections.abc.Callable[[IndicatorState], None]] = None, active: bool = False):
        self.render = render
        self.current = indicator_state(active)
        if self.render is not None:
            self.render(self.current)

    def __call__(self, active: bool):
        self.current = indicator_state(active)
        if self.render is not None:
            self.render(self.current)
