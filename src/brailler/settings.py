# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import datetime
import json
import pathlib
import typing

import cattrs

from .cells import Dot, coerce_dot
from .commontypes import SettingsError
from .durations import format_duration, parse_duration

# Perkins-style home row: left hand carries dots 1-3, right hand dots 4-6.
DOT_KEYS = {
    "f": 1,
    "d": 2,
    "s": 4,
    "j": 8,
    "k": 16,
    "l": 32,
}

# Ctrl-B
TOGGLE_KEY = "\x02"

DEBOUNCE = "150ms"


def structure_duration(val: typing.Union[str, int, float], _) -> datetime.timedelta:
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        # bare numbers are milliseconds
        return datetime.timedelta(milliseconds=val)
    try:
        return parse_duration(val)
    except (ValueError, AttributeError) as e:
        raise SettingsError(f"Invalid duration {val!r}") from e


settings_converter = cattrs.Converter(detailed_validation=False)
settings_converter.register_unstructure_hook(datetime.timedelta, format_duration)
settings_converter.register_structure_hook(datetime.timedelta, structure_duration)
settings_converter.register_unstructure_hook(Dot, int)
settings_converter.register_structure_hook(Dot, lambda v, _: coerce_dot(v))
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


@dataclasses.dataclass(kw_only=True)
class Settings:
    path: typing.Optional[pathlib.Path] = None
    debounce: datetime.timedelta = dataclasses.field(default_factory=lambda: parse_duration(DEBOUNCE))
    dot_keys: dict[str, Dot] = dataclasses.field(default_factory=lambda: {k: Dot(v) for k, v in DOT_KEYS.items()})
    toggle_key: str = TOGGLE_KEY
    clear_chord_on_deactivate: bool = False
    play_sounds: bool = False
    sound_dir: typing.Optional[pathlib.Path] = None

    def __post_init__(self):
        if self.debounce <= datetime.timedelta():
            raise SettingsError("debounce must be positive")
        if len(self.toggle_key) != 1:
            raise SettingsError(f"toggle key {self.toggle_key!r} must be a single character")
        for key, dot in self.dot_keys.items():
            if len(key) != 1:
                raise SettingsError(f"dot key {key!r} must be a single character")
            if key == self.toggle_key:
                raise SettingsError(f"{key!r} cannot be both the toggle key and a dot key")
            self.dot_keys[key] = coerce_dot(dot)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce.total_seconds()

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self.path
        if dest is None:
            raise SettingsError("no path to save settings to")
        raw = settings_converter.unstructure(self)
        del raw["path"]
        with dest.open("w", encoding="utf-8") as out:
            json.dump(raw, out, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        try:
            with src.open(encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsError(f"{src} is not valid JSON") from e
        if not isinstance(raw, dict):
            raise SettingsError(f"{src} does not contain a settings object")
        raw["path"] = str(src)
        return settings_converter.structure(raw, cls)

    @classmethod
    def default(cls):
        return cls()

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "path": "test.settings.json",
                "debounce": "100ms",
                "dot_keys": DOT_KEYS,
                "toggle_key": TOGGLE_KEY,
                "clear_chord_on_deactivate": False,
                "play_sounds": False,
                "sound_dir": None,
            },
            cls,
        )
