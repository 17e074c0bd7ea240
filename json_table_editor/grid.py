# json_table_editor/grid.py
"""Glue between a Projection and the DataFrame shown in the editable grid."""
from dataclasses import dataclass
from typing import Any, List

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class CellEdit:
    row_index: int
    column: str
    value: Any


def plain_value(value: Any) -> Any:
    """Convert numpy scalars and missing markers into plain Python values."""
    if isinstance(value, np.generic):
        value = value.item()
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def diff_frames(before: pd.DataFrame, after: pd.DataFrame) -> List[CellEdit]:
    """
    List the cells that differ between the rendered frame and the edited one.

    Both frames must have the same shape; rows are matched by position. A cell
    the user cleared is reported as an empty string.
    """
    if before.shape != after.shape:
        raise ValueError(f"Grid shape changed from {before.shape} to {after.shape}")
    if list(before.columns) != list(after.columns):
        raise ValueError("Grid columns changed")

    edits = []
    for row_index in range(len(before)):
        for position, column in enumerate(before.columns):
            old = plain_value(before.iat[row_index, position])
            new = plain_value(after.iat[row_index, position])
            if old == new and isinstance(old, bool) == isinstance(new, bool):
                continue
            if new is None:
                if old is None:
                    continue
                new = ""
            edits.append(CellEdit(row_index, str(column), new))
    return edits
