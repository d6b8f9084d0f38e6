"""Short durations as strings, such as "150ms" or "0.12s", based on Go's Duration format."""
import datetime
import decimal
import re

UNITS = {
    "us": datetime.timedelta(microseconds=1),
    "ms": datetime.timedelta(milliseconds=1),
    "s": datetime.timedelta(seconds=1),
}

# longest unit names first, so "ms" is not read as "m" followed by junk
PART_MATCHER = re.compile(r"(\d+(?:\.\d*)?)(us|ms|s)")


def maybe_int(val: float):
    return int(val) if val.is_integer() else val


def parse_duration(val: str) -> datetime.timedelta:
    if val.startswith("-"):
        raise ValueError("Durations may not be negative")
    val = val.removeprefix("+")
    if len(val) == 0:
        raise ValueError("Empty duration string")
    if val == "0":
        return datetime.timedelta()

    accum = datetime.timedelta()
    position = 0
    while position < len(val):
        match = PART_MATCHER.match(val, position)
        if match is None:
            raise ValueError(f"Invalid duration string {val!r}")
        number = decimal.Decimal(match.group(1))
        num, denom = number.as_integer_ratio()
        accum += num * UNITS[match.group(2)] / denom
        position = match.end()
    return accum


def format_duration(val: datetime.timedelta) -> str:
    if val == datetime.timedelta():
        return "0"
    if val < datetime.timedelta():
        raise ValueError("Durations may not be negative")
    if val < UNITS["ms"]:
        return f"{val.microseconds}us"
    if val < UNITS["s"]:
        return f"{maybe_int(val / UNITS['ms'])}ms"
    return f"{maybe_int(val.total_seconds())}s"
