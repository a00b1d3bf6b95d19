from typing import Any, Dict, Iterable, Optional

from chemistry.domain.exceptions import ValidationError


def string_errors(data: Dict[str, Any], fields: Iterable[str]):
    """Fields present in ``data`` whose value is neither null nor a string."""
    return [
        (field, "must be a string")
        for field in fields
        if data.get(field) is not None and not isinstance(data[field], str)
    ]


def assert_strings(data: Dict[str, Any], fields: Iterable[str]) -> None:
    errors = string_errors(data, fields)
    if errors:
        raise ValidationError(errors)


def string_value(field: str, value: Any, strip: bool = False) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError.single(field, "must be a string")
    return value.strip() if strip else value


def integer_value(field: str, value: Any) -> int:
    """Integers and numeric strings; null and empty count as zero."""
    if isinstance(value, bool):
        raise ValidationError.single(field, "must be an integer")
    try:
        return int(value or 0)
    except (TypeError, ValueError) as exc:
        raise ValidationError.single(field, "must be an integer") from exc
