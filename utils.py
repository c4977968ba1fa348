import io
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Mapping
from urllib.error import URLError

import pandas as pd

from constants import TEAMS_COLUMNS, RESULTS_COLUMNS
from models import RosterEntry, ResultEntry

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """A dataset could not be fetched or read."""


class CsvFormatError(DataLoadError):
    pass


class MissingColumnError(CsvFormatError):
    def __init__(self, missing: List[str], dataset: str | None = None):
        self.missing = list(missing)
        self.dataset = dataset
        message = f"Missing required columns: {', '.join(self.missing)}"
        if dataset:
            message = f"Error parsing {dataset} data: {message}"
        super().__init__(message)


def parse_flag(value) -> bool:
    """0/1 cell -> bool. Anything that reads as the number 1 is true."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    try:
        return float(str(value).strip()) == 1
    except ValueError:
        return False


def parse_count(value) -> int:
    """Attempts cell -> non-negative int; blanks and junk count as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def _strip_frame(df: pd.DataFrame) -> pd.DataFrame:
    for c in df.columns:
        df[c] = df[c].str.strip()
    return df


def parse_csv(source, required_columns: Iterable[str]) -> List[dict]:
    """Read a CSV source into a list of row dicts keyed by header.

    ``source`` is anything ``pd.read_csv`` accepts (path, URL, buffer).
    Headers and cells are trimmed, blank lines skipped, and rows whose
    column count does not match the header are dropped with a warning.

    Raises:
        CsvFormatError: the file is empty.
        MissingColumnError: a required column is absent from the header.
    """
    skipped = []

    def _skip_bad_line(bad_line: List[str]):
        skipped.append(bad_line)
        return None

    # header read as data so the first line fixes the field count for every row
    try:
        df = pd.read_csv(
            source,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
    except pd.errors.EmptyDataError as e:
        raise CsvFormatError("Empty CSV file") from e

    if df.empty or len(df.columns) == 0:
        raise CsvFormatError("CSV file has no columns")

    header = [str(c).strip() for c in df.iloc[0]]
    df = df.iloc[1:].reset_index(drop=True)
    df.columns = header
    df = _strip_frame(df)

    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise MissingColumnError(missing)

    for bad_line in skipped:
        logger.warning("Row has %d columns but expected %d. Skipping row.",
                       len(bad_line), len(header))
    # short rows come back padded with NaN
    short = df.isna().any(axis=1)
    for _ in range(int(short.sum())):
        logger.warning("Row has fewer than %d columns. Skipping row.", len(header))
    df = df[~short]

    return df.to_dict("records")


def parse_csv_text(text: str, required_columns: Iterable[str]) -> List[dict]:
    if text is None or not text.strip():
        raise CsvFormatError("Empty CSV file")
    return parse_csv(io.StringIO(text.strip()), required_columns)


def coalesce_cols(df: pd.DataFrame, cols: List[str]) -> None:
    for c in cols:
        if c not in df.columns:
            df[c] = ""


def build_roster(rows: Iterable[Mapping]) -> List[RosterEntry]:
    df = pd.DataFrame(list(rows))
    coalesce_cols(df, TEAMS_COLUMNS)
    df = df[TEAMS_COLUMNS].fillna("").astype(str)
    return [RosterEntry(**rec) for rec in df.to_dict("records")]


def build_results(rows: Iterable[Mapping]) -> List[ResultEntry]:
    df = pd.DataFrame(list(rows))
    coalesce_cols(df, RESULTS_COLUMNS)
    df = df[RESULTS_COLUMNS].copy()

    for c in ["comp_id", "comp_date", "boulder_id", "climber_id"]:
        df[c] = df[c].fillna("").astype(str)
    for c in ["attempts_to_zone", "attempts_to_top"]:
        df[c] = df[c].map(parse_count)
    for c in ["zone_completed", "top_completed"]:
        df[c] = df[c].map(parse_flag)

    return [
        ResultEntry(
            comp_id=rec["comp_id"],
            comp_date=rec["comp_date"],
            boulder_id=rec["boulder_id"],
            climber_id=rec["climber_id"],
            attempts_to_zone=int(rec["attempts_to_zone"]),
            attempts_to_top=int(rec["attempts_to_top"]),
            zone_completed=bool(rec["zone_completed"]),
            top_completed=bool(rec["top_completed"]),
        )
        for rec in df.to_dict("records")
    ]


# ─── Loading ────────────────────────────────────────────────────────

def _read_source(source: str, required_columns: List[str], label: str) -> List[dict]:
    try:
        return parse_csv(source, required_columns)
    except MissingColumnError as e:
        raise MissingColumnError(e.missing, dataset=label) from e
    except CsvFormatError as e:
        raise CsvFormatError(f"Error parsing {label} data: {e}") from e
    except (URLError, OSError) as e:
        if str(source).startswith(("http://", "https://")):
            raise DataLoadError(
                f"Unable to load {label} data from {source}. "
                "Make sure the sheet is published to the web as CSV "
                "(File > Share > Publish to web) and the URL is correct. "
                f"Error: {e}"
            ) from e
        raise DataLoadError(
            f"Unable to load {source}. Make sure the file exists next to the app."
        ) from e


def load_all_data(teams_source: str, results_source: str):
    """Fetch and parse both datasets; the two reads run concurrently."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        teams_job = pool.submit(_read_source, teams_source, TEAMS_COLUMNS, "teams")
        results_job = pool.submit(_read_source, results_source, RESULTS_COLUMNS, "results")
        team_rows = teams_job.result()
        result_rows = results_job.result()

    roster = build_roster(team_rows)
    results = build_results(result_rows)
    logger.info("Loaded %d roster rows and %d result rows", len(roster), len(results))
    return roster, results
