from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from ..catalog.categories import CategoryDirectory
from ..errors import InvalidQueryError
from .models import NearbyRequest, SearchRequest

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def _drop_blank(params: Mapping[str, Any]) -> dict[str, Any]:
    """Treat empty query-string values (``?city=``) as if they were absent."""
    return {
        key: value
        for key, value in params.items()
        if not (value is None or (isinstance(value, str) and not value.strip()))
    }


def _validate(model: type[_M], params: Mapping[str, Any], label: str) -> _M:
    try:
        return model.model_validate(_drop_blank(params))
    except ValidationError as exc:
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        raise InvalidQueryError(f"Invalid {label} parameters", errors) from exc


def normalize_query(
    params: Mapping[str, Any],
    directory: CategoryDirectory | None = None,
) -> SearchRequest:
    """
    Turn raw query parameters into a fully defaulted ``SearchRequest``.

    Raises ``InvalidQueryError`` for non-numeric or out-of-range values. An
    unknown ``categorySlug`` is not an error: the category filter is dropped.
    """
    request = _validate(SearchRequest, params, "search")

    updates: dict[str, Any] = {}
    if request.q is not None:
        updates["q"] = request.q.strip() or None

    if not request.category_id and request.category_slug and directory is not None:
        category_id = directory.resolve_slug(request.category_slug)
        if category_id:
            updates["category_id"] = category_id
        else:
            logger.debug("Category slug %r did not resolve; dropping filter", request.category_slug)

    return request.model_copy(update=updates) if updates else request


def normalize_nearby(params: Mapping[str, Any]) -> NearbyRequest:
    return _validate(NearbyRequest, params, "nearby")
