from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .models import Activity

logger = logging.getLogger(__name__)


@dataclass
class RowError:
    """
    A workload row that was skipped while loading.
    """

    line: int
    raw: str
    reason: str


def load_workload(path: str | Path) -> List[Activity]:
    """
    Load activities from a delimited text (.csv / .txt) or JSON file.

    Malformed rows are skipped with a warning; a file without a single valid
    activity is an error.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".csv", ".txt"):
        activities, errors = _load_csv(path)
    elif suffix == ".json":
        activities, errors = _load_json(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .csv, .txt or .json)")

    for err in errors:
        logger.warning("%s:%d: skipped %r (%s)", path.name, err.line, err.raw, err.reason)

    if not activities:
        raise ValueError(f"No valid activities found in {path}")

    logger.debug("loaded %d activities from %s (%d skipped)", len(activities), path, len(errors))
    return activities


def parse_rows(rows: Iterable[Sequence[str]]) -> Tuple[List[Activity], List[RowError]]:
    """
    Parse ``name,ti,t`` rows. A leading header row whose first cell is
    ``name`` is ignored, as are blank rows.
    """
    activities: List[Activity] = []
    errors: List[RowError] = []

    seen_content = False
    for line, row in enumerate(rows, start=1):
        cells = [cell.strip() for cell in row]
        if not any(cells):
            continue
        first_row = not seen_content
        seen_content = True
        if first_row and cells[0].lower() == "name":
            continue

        raw = ",".join(row)
        if len(cells) != 3:
            errors.append(RowError(line, raw, f"expected 3 fields, got {len(cells)}"))
            continue

        try:
            activities.append(_activity_from_values(cells[0], cells[1], cells[2]))
        except ValueError as exc:
            errors.append(RowError(line, raw, str(exc)))

    return activities, errors


def _load_csv(path: Path) -> Tuple[List[Activity], List[RowError]]:
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        return parse_rows(csv.reader(f))


def _load_json(path: Path) -> Tuple[List[Activity], List[RowError]]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of activity objects")

    activities: List[Activity] = []
    errors: List[RowError] = []
    for idx, entry in enumerate(raw, start=1):
        try:
            activities.append(_activity_from_mapping(entry))
        except ValueError as exc:
            errors.append(RowError(idx, json.dumps(entry), str(exc)))

    return activities, errors


def _activity_from_mapping(mapping) -> Activity:
    try:
        name = mapping["name"]
        ti = mapping["ti"] if "ti" in mapping else mapping["arrival_time"]
        t = mapping["t"] if "t" in mapping else mapping["service_time"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"missing field {exc}") from exc

    if not isinstance(name, str):
        raise ValueError(f"name must be a string, got {name!r}")
    for value in (ti, t):
        # JSON booleans decode to int subclasses.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"times must be integers, got {value!r}")

    return _activity_from_values(name, ti, t)


def _activity_from_values(name: str, ti, t) -> Activity:
    if not name:
        raise ValueError("empty name")

    try:
        arrival_time = int(ti)
        service_time = int(t)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"times must be integers ({exc})") from exc

    if arrival_time < 0:
        raise ValueError("arrival time must be non-negative")
    if service_time <= 0:
        raise ValueError("service time must be positive")

    return Activity(name=name, arrival_time=arrival_time, service_time=service_time)
