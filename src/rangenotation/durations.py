"""ISO-8601 durations (``PT1H30M``) for ``timedelta`` endpoints."""

import re
from datetime import timedelta

# Java-style seconds-based durations: days, hours, minutes, seconds only.
_DURATION_RE = re.compile(
    r"([-+]?)P"
    r"(?:([-+]?[0-9]+)D)?"
    r"(T(?:([-+]?[0-9]+)H)?(?:([-+]?[0-9]+)M)?"
    r"(?:([-+]?[0-9]+)(?:[.,]([0-9]{0,9}))?S)?)?",
    re.IGNORECASE,
)

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE


def _fraction_micros(fraction: str, negative: bool) -> int:
    if not fraction:
        return 0
    # Sub-microsecond digits are truncated; timedelta cannot hold them.
    micros = int((fraction + "000000")[:6])
    return -micros if negative else micros


def parse_iso_duration(value: str) -> timedelta:
    match = _DURATION_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"Text cannot be parsed to a Duration: {value!r}")
    sign, days, time_part, hours, minutes, seconds, fraction = match.groups()
    if time_part is not None and time_part.upper() == "T":
        raise ValueError(f"Text cannot be parsed to a Duration: {value!r}")
    if days is None and time_part is None:
        raise ValueError(f"Text cannot be parsed to a Duration: {value!r}")

    total = timedelta(
        days=int(days or 0),
        hours=int(hours or 0),
        minutes=int(minutes or 0),
        seconds=int(seconds or 0),
        microseconds=_fraction_micros(
            fraction or "", (seconds or "").startswith("-")
        ),
    )
    return -total if sign == "-" else total


def format_iso_duration(value: timedelta) -> str:
    """Render ``value`` the way ``parse_iso_duration`` reads it back.

    Days are folded into hours, as in ``PT48H``; a negative duration gets a
    single leading sign.
    """
    micros = (
        value.days * 24 * _MICROS_PER_HOUR
        + value.seconds * _MICROS_PER_SECOND
        + value.microseconds
    )
    if micros == 0:
        return "PT0S"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    hours, micros = divmod(micros, _MICROS_PER_HOUR)
    minutes, micros = divmod(micros, _MICROS_PER_MINUTE)
    seconds, micros = divmod(micros, _MICROS_PER_SECOND)

    parts = [f"{sign}PT"]
    if hours:
        parts.append(f"{hours}H")
    if minutes:
        parts.append(f"{minutes}M")
    if seconds or micros:
        if micros:
            fraction = f"{micros:06d}".rstrip("0")
            parts.append(f"{seconds}.{fraction}S")
        else:
            parts.append(f"{seconds}S")
    return "".join(parts)
