"""
Custom column types.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

from shared.utils.schemas import OrderLineItem


class LineItemList(TypeDecorator):
    """
    Order lines stored as a JSON array in a TEXT column.

    Python code only ever sees list[OrderLineItem]; the JSON encoding
    happens here, when values cross into and out of the database.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> str | None:
        if value is None:
            return None
        items = [
            item if isinstance(item, OrderLineItem) else OrderLineItem.model_validate(item)
            for item in value
        ]
        return json.dumps([item.model_dump(mode="json", exclude_none=True) for item in items])

    def process_result_value(self, value: str | None, dialect: Any) -> list[OrderLineItem]:
        if not value:
            return []
        return [OrderLineItem.model_validate(raw) for raw in json.loads(value)]
