"""Coordinate extraction from popup text like ``"... (51.505, -0.09) ..."``."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from map_healthcheck.errors import FormatError

log = logging.getLogger(__name__)

# Plain decimal, optionally signed, optional exponent. No nan/inf.
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class Coordinates(NamedTuple):
    lat: float
    lon: float


def _to_decimal(raw: str, text: str) -> float:
    value = raw.strip()
    if not _DECIMAL.fullmatch(value):
        raise FormatError(text, f"not a decimal number: {value!r}")
    return float(value)


def _split_pair(text: str) -> tuple[str, str]:
    """Return the raw latitude and the remainder after its comma."""
    open_idx = text.find("(")
    if open_idx == -1:
        raise FormatError(text, "no '(' in popup text")
    comma_idx = text.find(",", open_idx + 1)
    if comma_idx == -1:
        raise FormatError(text, "no ',' after '('")
    return text[open_idx + 1:comma_idx], text[comma_idx + 1:]


def parse_latitude(text: str) -> float:
    """Latitude between the first ``(`` and the following ``,``.

    Raises FormatError carrying the raw text when the pair is missing or the
    latitude is not a decimal number.
    """
    log.debug("PARSING: Extracting latitude from: %s", text)
    raw_lat, _ = _split_pair(text)
    latitude = _to_decimal(raw_lat, text)
    log.debug("PARSING: Extracted latitude: %s", latitude)
    return latitude


def parse_coordinates(text: str) -> Coordinates:
    """Both members of the ``(lat, lon)`` pair."""
    raw_lat, rest = _split_pair(text)
    close_idx = rest.find(")")
    if close_idx == -1:
        raise FormatError(text, "no ')' after longitude")
    return Coordinates(_to_decimal(raw_lat, text), _to_decimal(rest[:close_idx], text))
