import re

from carnival.scoring.errors import InvalidPointsError

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


def parse_points(raw: str | None, *, action: str = "award") -> int:
    """Parse staff-entered points. Anything but a non-zero integer is refused.

    There is no bound and negative values are allowed, so a correction can
    take points away.
    """
    if raw is None or not _INTEGER_PATTERN.match(raw):
        raise InvalidPointsError(f"Please enter points to {action}!")
    points = int(raw)
    if points == 0:
        raise InvalidPointsError(f"Please enter points to {action}!")
    return points
