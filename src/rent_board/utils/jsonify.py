from __future__ import annotations

from typing import Any, Iterable, List

from pydantic import BaseModel


def jsonify(item: Any) -> Any:
    """Convert a Pydantic model into a JSON-serializable dict.

    - Calls ``model_dump(mode="json", by_alias=True)`` so listings carry the
      camelCase field names both stores expect.
    - Leaves plain dicts/values untouched.
    """
    if isinstance(item, BaseModel):
        return item.model_dump(mode="json", by_alias=True)
    return item


def jsonify_listings(listings: Iterable[Any]) -> List[Any]:
    return [jsonify(l) for l in listings]
