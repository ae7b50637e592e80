from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Union

import pandas as pd

from config.paths import DATA_DIR
from exceptions.custom_errors import FileContentError, FileReadingError

PathOrBuffer = Union[str, Path, IO, None]

LIST_COLUMNS = {"skills", "required_skills", "allowed_groups"}
TRUE_VALUES = {"true", "yes", "y", "1"}
FALSE_VALUES = {"false", "no", "n", "0"}


def read_table(path_or_buffer: PathOrBuffer) -> pd.DataFrame:
    """Read a CSV or Excel file into a DataFrame with lower-cased, stripped columns."""
    try:
        name = str(getattr(path_or_buffer, "name", path_or_buffer))
        if name.lower().endswith((".xlsx", ".xls")):
            df = pd.read_excel(path_or_buffer)
        else:
            df = pd.read_csv(path_or_buffer)
    except Exception as e:
        raise FileReadingError(f"Error loading {path_or_buffer}: {e}")

    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    return df


def _as_text(value: Any) -> str:
    # Integer columns with blanks come back as floats
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _split_list(value: Any) -> List[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return [s.strip() for s in _as_text(value).replace(";", ",").split(",") if s.strip()]


def _parse_bool(value: Any, column: str) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise FileContentError(f"Invalid boolean value {value!r} in column '{column}'")


def _records(df: pd.DataFrame, kind: str) -> List[Dict[str, Any]]:
    if "name" not in df.columns:
        raise FileContentError(f"No 'name' column found in {kind} file")

    df = df.dropna(subset=["name"]).copy()
    df["name"] = df["name"].astype(str).str.strip()
    if df["name"].duplicated().any():
        raise FileContentError(
            f"Duplicate {kind} names found: {df['name'][df['name'].duplicated()].tolist()}."
        )

    records = []
    for row in df.to_dict(orient="records"):
        attributes = {}
        for key, value in row.items():
            if key in LIST_COLUMNS:
                attributes[key] = _split_list(value)
            elif isinstance(value, float) and pd.isna(value):
                continue
            else:
                attributes[key] = value
        records.append(attributes)
    return records


def load_participants(path_or_buffer: PathOrBuffer = None) -> List[Dict[str, Any]]:
    """
    Load participant attributes from a CSV or Excel file.

    Parameters:
        path_or_buffer: Path or file-like object. Defaults to 'data/participants.csv'.

    Returns:
        List of attribute dicts with `name`, optional `id`, `group`,
        `skills` (list) and `availability` (bool).
    """
    if path_or_buffer is None:
        path_or_buffer = DATA_DIR / "participants.csv"

    records = _records(read_table(path_or_buffer), "participant")
    for attributes in records:
        if "availability" in attributes:
            attributes["availability"] = _parse_bool(attributes["availability"], "availability")
        if "group" in attributes:
            attributes["group"] = _as_text(attributes["group"])
    return records


def load_targets(path_or_buffer: PathOrBuffer = None) -> List[Dict[str, Any]]:
    """
    Load target attributes from a CSV or Excel file.

    Parameters:
        path_or_buffer: Path or file-like object. Defaults to 'data/targets.csv'.

    Returns:
        List of attribute dicts with `name`, `required_count` (int, default 1),
        `required_skills`, `allowed_groups` (lists) and `cooldown`.
    """
    if path_or_buffer is None:
        path_or_buffer = DATA_DIR / "targets.csv"

    records = _records(read_table(path_or_buffer), "target")
    for attributes in records:
        raw_count = attributes.get("required_count", 1)
        try:
            count = int(raw_count)
        except (TypeError, ValueError):
            raise FileContentError(
                f"Invalid required_count {raw_count!r} for target '{attributes['name']}'"
            )
        if count < 1:
            raise FileContentError(
                f"required_count must be positive for target '{attributes['name']}'"
            )
        attributes["required_count"] = count
        if "cooldown" in attributes:
            attributes["cooldown"] = str(attributes["cooldown"]).strip().lower()
    return records


def seed_store(
    store,
    participants_path: PathOrBuffer = None,
    targets_path: PathOrBuffer = None,
) -> Dict[str, int]:
    """Create store entities from participant and target files; returns counts per type."""
    counts = {}
    for entity_type, records in (
        ("participant", load_participants(participants_path)),
        ("target", load_targets(targets_path)),
    ):
        for attributes in records:
            entity_id: Optional[str] = attributes.pop("id", None)
            store.create_entity(
                entity_type, attributes, _as_text(entity_id) if entity_id is not None else None
            )
        counts[entity_type] = len(records)
    return counts
