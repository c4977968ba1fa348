from typing import List, Sequence

import numpy as np
import pandas as pd


def _field(item, key):
    if isinstance(item, dict):
        return item.get(key)
    return getattr(item, key, None)


def leaderboard_key(item, name_key: str):
    """Points high to low, then attempts low to high, then name A to Z (any case)."""
    name = _field(item, name_key)
    return (
        -(_field(item, "total_points") or 0),
        _field(item, "total_attempts") or 0,
        str(name or "").casefold(),
    )


def sort_leaderboard(items: Sequence, name_key: str) -> List:
    return sorted(items, key=lambda item: leaderboard_key(item, name_key))


def rank_leaderboard(items: Sequence, name_key: str) -> List[tuple]:
    """(rank, item) pairs; rank is the 1-based position in leaderboard order."""
    return list(enumerate(sort_leaderboard(items, name_key), start=1))


def leaderboard_frame(items: Sequence, name_key: str, columns: dict) -> pd.DataFrame:
    """Ranked table for display.

    ``columns`` maps item fields to display headers. The Rank column is
    fixed here, so re-sorting the frame by any other column keeps each row's
    rank with it.
    """
    rows = []
    for rank, item in rank_leaderboard(items, name_key):
        row = {"Rank": rank}
        for field_name, header in columns.items():
            row[header] = _field(item, field_name)
        rows.append(row)
    df = pd.DataFrame(rows, columns=["Rank"] + list(columns.values()))

    points_col = columns.get("total_points")
    attempts_col = columns.get("total_attempts")
    if points_col and attempts_col and not df.empty:
        # points per attempt, blank for climbers who have not tried anything
        df["Pts / Attempt"] = np.where(
            df[attempts_col] > 0,
            (df[points_col] / df[attempts_col].where(df[attempts_col] > 0, 1)).round(2),
            np.nan,
        )
    return df
