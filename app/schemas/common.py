from typing import Annotated, Any

from pydantic import StringConstraints

NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def to_list(value: Any, separator: str) -> Any:
    """Accept a list or a delimited string; drop blank entries."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(separator)
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return value
