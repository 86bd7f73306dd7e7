from __future__ import annotations

from functools import lru_cache
from typing import Any, List

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import SchemaValidationError

ROOT_PATH = "(root)"


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def format_issues(exc: ValidationError) -> List[str]:
    issues = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error.get("loc", ())) or ROOT_PATH
        issues.append(f"{path}: {error.get('msg', 'invalid value')}")
    return issues


def validate_schema(endpoint: str, schema: Any, data: Any) -> Any:
    """
    Parse `data` against `schema` or raise SchemaValidationError.

    `schema` is a pydantic model class or any type TypeAdapter accepts,
    e.g. ``List[TrendingNowItem]``. An instance of the model class itself
    passes straight through, so already-built request objects are accepted.
    """
    if isinstance(data, BaseModel) and type(data) is schema:
        return data
    try:
        return _adapter(schema).validate_python(data)
    except ValidationError as exc:
        raise SchemaValidationError(endpoint=endpoint, issues=format_issues(exc)) from exc
