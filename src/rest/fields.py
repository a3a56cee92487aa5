"""Registry of extra fields attached to API representations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# get_callback(obj, context) -> value
GetCallback = Callable[[Any, Any], Any]
# update_callback(value, obj) -> success
UpdateCallback = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class RestField:
    """A derived field on one object type's representation."""

    object_type: str
    name: str
    get_callback: GetCallback | None = None
    update_callback: UpdateCallback | None = None
    schema: dict[str, Any] = field(default_factory=dict)

    @property
    def readable(self) -> bool:
        return self.get_callback is not None

    @property
    def writable(self) -> bool:
        return self.update_callback is not None


class RestFieldRegistry:
    """Fields keyed by (object type, field name), in registration order.

    Registering an existing (object type, name) pair replaces it.
    """

    def __init__(self) -> None:
        self._fields: dict[str, dict[str, RestField]] = {}

    def register(
        self,
        object_type: str,
        name: str,
        *,
        get_callback: GetCallback | None = None,
        update_callback: UpdateCallback | None = None,
        schema: dict[str, Any] | None = None,
    ) -> RestField:
        rest_field = RestField(
            object_type=object_type,
            name=name,
            get_callback=get_callback,
            update_callback=update_callback,
            schema=schema or {},
        )
        self._fields.setdefault(object_type, {})[name] = rest_field
        logger.debug("Registered REST field %s.%s", object_type, name)
        return rest_field

    def get(self, object_type: str, name: str) -> RestField | None:
        return self._fields.get(object_type, {}).get(name)

    def fields_for(self, object_type: str) -> list[RestField]:
        return list(self._fields.get(object_type, {}).values())

    def names_for(self, object_type: str) -> list[str]:
        return list(self._fields.get(object_type, {}))

    def object_types(self) -> list[str]:
        return list(self._fields)
