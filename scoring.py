from typing import Mapping

from constants import ZONE_POINTS, TOP_POINTS
from models import ResultEntry
from utils import parse_flag


def _flag(result, name: str) -> bool:
    if isinstance(result, ResultEntry):
        return getattr(result, name)
    if isinstance(result, Mapping):
        return parse_flag(result.get(name))
    return parse_flag(getattr(result, name, None))


def compute_points(result) -> int:
    """50 for reaching the zone, 50 more for the top. Always 0, 50 or 100.

    ``result`` may be a typed ResultEntry or a raw CSV row; raw cells count
    as completed only when they read as 1.
    """
    points = 0
    if _flag(result, "zone_completed"):
        points += ZONE_POINTS
    if _flag(result, "top_completed"):
        points += TOP_POINTS
    return points
