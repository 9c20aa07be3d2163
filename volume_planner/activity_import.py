"""
Activity import from training-log exports.

Supports the JSON backup format (a list of activities, or an object with an
``activities`` key) and flat CSV files with one activity per row.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from .models import Activity, activity_from_dict

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = ["type", "date"]


class ActivityImportError(Exception):
    """Raised when an activity export cannot be read."""


def load_activities(path: Union[str, Path]) -> List[Activity]:
    """Load activities from a JSON or CSV export.

    Args:
        path: Path to a ``.json`` or ``.csv`` file

    Returns:
        List of activities; records with unknown types are skipped

    Raises:
        ActivityImportError: If the file is missing, unreadable or of an unsupported type
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ActivityImportError(f"Activity file not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix == ".json":
        records = _read_json_records(file_path)
    elif suffix == ".csv":
        records = _read_csv_records(file_path)
    else:
        raise ActivityImportError(f"Unsupported activity file type '{suffix}' (expected .json or .csv)")

    activities = _parse_records(records)
    logger.info(f"Loaded {len(activities)} activities from {file_path.name}")
    return activities


def _read_json_records(file_path: Path) -> List[Dict]:
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ActivityImportError(f"Invalid JSON in {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("activities", [])
    if not isinstance(data, list):
        raise ActivityImportError(f"Expected a list of activities in {file_path}")
    return data


def _read_csv_records(file_path: Path) -> List[Dict]:
    try:
        df = pd.read_csv(file_path, encoding="utf-8")
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise ActivityImportError(f"Could not read CSV {file_path}: {e}") from e

    df.columns = df.columns.str.strip()
    missing = [col for col in REQUIRED_CSV_COLUMNS if col not in df.columns]
    if missing:
        raise ActivityImportError(f"CSV {file_path} is missing columns: {', '.join(missing)}")

    if "distanceInKm" not in df.columns:
        df["distanceInKm"] = 0.0
    if "durationInSeconds" not in df.columns:
        df["durationInSeconds"] = 0
    if "id" not in df.columns:
        df["id"] = df.index.astype(str)

    df["distanceInKm"] = pd.to_numeric(df["distanceInKm"], errors="coerce").fillna(0.0)
    df["durationInSeconds"] = pd.to_numeric(df["durationInSeconds"], errors="coerce").fillna(0).astype(int)
    df["type"] = df["type"].astype(str).str.strip()
    df["date"] = df["date"].astype(str).str.strip()

    columns = ["id", "type", "date", "distanceInKm", "durationInSeconds"]
    return df[columns].to_dict(orient="records")


def _parse_records(records: List[Dict]) -> List[Activity]:
    activities = []
    skipped = 0
    for record in records:
        try:
            activities.append(activity_from_dict(record))
        except (KeyError, ValueError) as e:
            skipped += 1
            logger.warning(f"Skipping activity record {record.get('id', '?')}: {e}")
    if skipped:
        logger.warning(f"Skipped {skipped} of {len(records)} activity records")
    return activities
