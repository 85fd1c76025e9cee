"""
Repository mixins for shared data-handling patterns.
"""

import json
from typing import Any, ClassVar, Optional


class JSONListFieldMixin:
    """Encodes list-of-string fields (tags, interests) as JSON text.

    Repositories list the affected column names in ``json_list_fields``;
    models decode them again with ``load_json_list``.
    """

    json_list_fields: ClassVar[frozenset[str]] = frozenset()

    @staticmethod
    def _encode_list(field_name: str, value: Optional[list[str]]) -> Optional[str]:
        """Encode one list; an empty list is stored as NULL.

        Example:
            self._encode_list("tags", ["ai", "media"])
            # Returns: '["ai", "media"]'

        Raises:
            TypeError: If the value is not a list of strings
        """
        if value is None or value == []:
            return None
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise TypeError(f"{field_name} must be a list of strings, got {value!r}")
        return json.dumps(value)

    def _encode_list_fields(self, data: dict[str, Any]) -> dict[str, Any]:
        """Encode every configured list field present in ``data``."""
        for field_name in data.keys() & self.json_list_fields:
            data[field_name] = self._encode_list(field_name, data[field_name])
        return data
