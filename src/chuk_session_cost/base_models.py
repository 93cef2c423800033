# chuk_session_cost/base_models.py
"""Base model with dict-style access and camelCase export."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def to_camel(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class DictCompatModel(BaseModel):
    """Base for result models handed to consumers that expect plain dicts.

    Allows ``obj["key"]``, ``obj.get("key")`` and ``"key" in obj``. Keys may be
    given in snake_case or in the camelCase spelling used by UI consumers.
    """

    def _resolve_key(self, key: str) -> str | None:
        fields = type(self).model_fields
        if key in fields:
            return key
        for name in fields:
            if to_camel(name) == key:
                return name
        return None

    def __getitem__(self, key: str) -> Any:
        name = self._resolve_key(key)
        if name is None:
            raise KeyError(key)
        return getattr(self, name)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            return self._resolve_key(key) is not None
        return False

    def get(self, key: str, default: Any = None) -> Any:
        name = self._resolve_key(key)
        return default if name is None else getattr(self, name)

    def to_camel_dict(self) -> dict[str, Any]:
        """Dump fields with camelCase keys (``totalCost``, ``durationSeconds``...)."""
        return {to_camel(k): v for k, v in self.model_dump().items()}

    def __eq__(self, other: object) -> bool:
        if isinstance(other, dict):
            return self.model_dump() == other or self.to_camel_dict() == other
        return super().__eq__(other)
