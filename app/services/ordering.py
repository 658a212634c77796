from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from app.core.errors import InvalidArgument
from app.schemas.query import SortKey
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

ORDER_FIELD = "order"
BY_ORDER = (SortKey(field=ORDER_FIELD, dir="asc"),)


def next_order(store: RecordStore) -> int:
    current = store.max_value(ORDER_FIELD)
    return 0 if current is None else int(current) + 1


def resolve_create_order(store: RecordStore, payload: dict[str, Any]) -> dict[str, Any]:
    """Fill in ``order`` for a new record unless the caller chose one (0 included)."""
    values = dict(payload)
    if values.get(ORDER_FIELD) is None:
        values[ORDER_FIELD] = next_order(store)
    return values


def _validated_assignments(assignments: Any) -> list[tuple[Any, int]]:
    message = "Please provide an array of items with id and order"
    if assignments is None or isinstance(assignments, (str, bytes, Mapping)) or not isinstance(assignments, Sequence):
        raise InvalidArgument(message)
    if not assignments:
        raise InvalidArgument(message)
    pairs = []
    for item in assignments:
        if not isinstance(item, Mapping) or "id" not in item or ORDER_FIELD not in item:
            raise InvalidArgument(message)
        order = item[ORDER_FIELD]
        if isinstance(order, bool) or not isinstance(order, int):
            raise InvalidArgument(f"order must be an integer, got {order!r}")
        pairs.append((item["id"], order))
    return pairs


def reorder(store: RecordStore, assignments: Any) -> list:
    """Apply ``[{id, order}, ...]`` and return every record sorted by order.

    Each assignment is written and committed on its own; a storage failure part
    way through leaves the earlier assignments applied. Unknown ids are skipped.
    """
    pairs = _validated_assignments(assignments)
    for record_id, order in pairs:
        if store.update_by_id(record_id, {ORDER_FIELD: order}) is None:
            logger.info("reorder skipped missing %s id=%s", store.collection.name, record_id)
    return store.find_sorted(None, BY_ORDER)
