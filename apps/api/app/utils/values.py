from typing import Any


def is_blank(value: Any) -> bool:
    """
    True for JSON values that count as absent: null, false, 0 and "".
    Empty objects and arrays are real values and are not blank.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return value == ""
