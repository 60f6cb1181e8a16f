"""
Publication date parsing.

Dates are matched against a fixed, ordered set of shapes: epoch timestamps,
relative phrases ("3 hours ago"), ISO 8601 and a list of common formats. A
string that fits none of them yields None rather than a guess.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo

import structlog
from dateutil import parser, tz
from dateutil.relativedelta import relativedelta

logger = structlog.get_logger(__name__)

MS_DATE_RE = re.compile(r"^\d{13}$")
SEC_DATE_RE = re.compile(r"^\d{10}$")
CLEAN_DATE_STRING_RE = re.compile(r"^\s*published\s*:?\s*(.*)", re.IGNORECASE)
TIME_MERIDIAN_SPACE_RE = re.compile(r"(.*\d)(a|p)(\s*m.*)", re.IGNORECASE)
TIME_MERIDIAN_DOTS_RE = re.compile(r"\.m\.", re.IGNORECASE)
TIME_NOW_RE = re.compile(r"^\s*(just|right)?\s*now\s*", re.IGNORECASE)
TIME_AGO_RE = re.compile(r"(\d+)\s+(second|minute|hour|day|week|month|year)s?\s+ago", re.IGNORECASE)
SPLIT_DATE_RE = re.compile(
    r"([0-9]{1,2}:[0-9]{2}( ?[ap]\.?m\.?)?)|([0-9]{1,2}[/-][0-9]{1,2}[/-][0-9]{2,4})|(-[0-9]{3,4}$)|([0-9]{1,4})"
    r"|(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)",
    re.IGNORECASE,
)
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}(-\d{2})?([T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?)?(Z|[+-]\d{2}:?\d{2})?$")

DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d, %Y %H:%M:%S",
    "%b %d, %Y %H:%M:%S",
    "%B %d, %Y %I:%M %p",
    "%b %d, %Y %I:%M %p",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
    "%m-%d-%Y",
    "%m-%d-%Y %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%b/%d",
    "%Y/%m/%d %H:%M:%S",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S %Z",
]

# Moment-style tokens accepted in custom extractor ``format`` values
MOMENT_TOKENS = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "DD": "%d",
    "D": "%d",
    "HH": "%H",
    "H": "%H",
    "hh": "%I",
    "h": "%I",
    "mm": "%M",
    "ss": "%S",
    "A": "%p",
    "a": "%p",
    "Z": "%z",
}
MOMENT_TOKEN_RE = re.compile("|".join(sorted(MOMENT_TOKENS, key=len, reverse=True)))


def moment_to_strptime(date_format: str) -> str:
    """Translate a moment-style format such as ``MM/DD/YYYY h:mm A`` to strptime directives."""
    return MOMENT_TOKEN_RE.sub(lambda match: MOMENT_TOKENS[match.group(0)], date_format)


def _zone(timezone: str | None) -> tzinfo:
    if timezone:
        zone = tz.gettz(timezone)
        if zone is not None:
            return zone
        logger.debug("Unknown timezone, assuming UTC", timezone=timezone)
    return tz.UTC


def _to_utc(value: datetime, zone: tzinfo) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=zone)
    return value.astimezone(tz.UTC)


def _relative_date(date_string: str) -> datetime | None:
    match = TIME_AGO_RE.search(date_string)
    if match:
        amount = int(match.group(1))
        unit = match.group(2).lower() + "s"
        return datetime.now(tz.UTC) - relativedelta(**{unit: amount})

    if TIME_NOW_RE.match(date_string):
        return datetime.now(tz.UTC)

    return None


def _parse_formats(date_string: str, formats: list[str], zone: tzinfo) -> datetime | None:
    for date_format in formats:
        try:
            return _to_utc(datetime.strptime(date_string, date_format), zone)
        except ValueError:
            continue
    return None


def _create_date(date_string: str, zone: tzinfo, date_format: str | None) -> datetime | None:
    date_string = date_string.strip()
    if not date_string:
        return None

    relative = _relative_date(date_string)
    if relative is not None:
        return relative

    if date_format:
        parsed = _parse_formats(date_string, [moment_to_strptime(date_format)], zone)
        if parsed is not None:
            return parsed

    if ISO_DATE_RE.match(date_string):
        try:
            return _to_utc(parser.isoparse(date_string), zone)
        except ValueError:
            pass

    return _parse_formats(date_string, DATE_FORMATS, zone)


def _fix_meridian(text: str) -> str:
    text = TIME_MERIDIAN_DOTS_RE.sub("m", text)

    def _spaced(match: re.Match[str]) -> str:
        suffix = match.group(3).strip()
        return f"{match.group(1)} {match.group(2)}{suffix}"

    return TIME_MERIDIAN_SPACE_RE.sub(_spaced, text)


def clean_date_string(date_string: str) -> str:
    """
    Tidy a date string for a second parse attempt.

    ``10:30 a.m.`` becomes ``10:30 am`` and a ``Published:`` prefix is dropped.
    When the string still mentions "published" the date-like fragments are
    pulled out and reassembled.
    """
    cleaned = _fix_meridian(date_string)
    cleaned = CLEAN_DATE_STRING_RE.sub(r"\1", cleaned)

    if "published" in cleaned.lower():
        fragments = [match.group(0) for match in SPLIT_DATE_RE.finditer(date_string)]
        if len(fragments) > 1:
            assembled = _fix_meridian(" ".join(fragments))
            return CLEAN_DATE_STRING_RE.sub(r"\1", assembled).strip()

    return cleaned.strip()


def clean_date_published(
    date_string: str,
    timezone: str | None = None,
    date_format: str | None = None,
) -> datetime | None:
    """
    Parse a publication date into an aware UTC datetime.

    Args:
        date_string: Raw date text from a meta tag, selector or URL
        timezone: IANA zone applied to naive dates, UTC when omitted
        date_format: Optional moment-style format tried before the defaults

    Returns:
        The parsed date, or None when no known shape matches
    """
    date_string = (date_string or "").strip()
    if not date_string:
        return None

    if MS_DATE_RE.match(date_string):
        return datetime.fromtimestamp(int(date_string) / 1000, tz=tz.UTC)

    if SEC_DATE_RE.match(date_string):
        return datetime.fromtimestamp(int(date_string), tz=tz.UTC)

    zone = _zone(timezone)
    parsed = _create_date(date_string, zone, date_format)
    if parsed is None:
        cleaned = clean_date_string(date_string)
        if cleaned != date_string:
            parsed = _create_date(cleaned, zone, date_format)

    return parsed
