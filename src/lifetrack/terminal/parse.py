# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from lifetrack.errors import ParseError
from lifetrack.model.entity_id import EntityId
from lifetrack.time import parse_date, parse_month, today

_DAY_OFFSET_PATTERN = re.compile(r"^[+-]\d{1,5}$")


def parse_day(day_param: str) -> pendulum.Date:
    """Accept a date key, 'today'/'t', 'yesterday'/'y' or a signed day offset like -3 or +2."""
    if day_param in ("today", "t"):
        return today()
    if day_param in ("yesterday", "y"):
        return today().subtract(days=1)
    if _DAY_OFFSET_PATTERN.match(day_param) is not None:
        return today().add(days=int(day_param))
    try:
        return parse_date(day_param)
    except ParseError as e:
        raise typer.BadParameter(str(e))


def parse_month_option(month_param: Optional[str]) -> Optional[pendulum.Date]:
    if month_param is None:
        return None
    try:
        return parse_month(month_param)
    except ParseError as e:
        raise typer.BadParameter(str(e))


def parse_metadata(pairs: Optional[list[str]]) -> Optional[dict[str, str]]:
    """Turn repeated 'key=value' options into an ordered mapping."""
    if pairs is None:
        return None
    metadata: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Empty metadata key in {pair!r}")
        metadata[key] = value.strip()
    return metadata


def resolve_id(id_param: str, known_ids: list[EntityId], kind: str) -> EntityId:
    """Resolve a full id or a unique id prefix."""
    if id_param in known_ids:
        return id_param
    matches = [known_id for known_id in known_ids if known_id.startswith(id_param)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        # Unknown ids pass through; deletes treat them as no-ops
        return id_param
    raise typer.BadParameter(f"Ambiguous {kind} id prefix: {id_param}")
