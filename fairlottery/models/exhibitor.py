from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass
class ExhibitorAccount:
    """An exhibitor allowed to register orders with its access code."""

    id: str
    name: str
    access_code: str

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "accessCode": self.access_code}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ExhibitorAccount":
        """Build an account from its stored JSON object.

        Raises
        ------
        ValueError
            If ``id``, ``name`` or ``accessCode`` is missing or not a string.
        """
        if not isinstance(data, Mapping):
            raise ValueError("exhibitor entry must be a JSON object")
        values = {}
        for key in ("id", "name", "accessCode"):
            value = data.get(key)
            if not isinstance(value, str):
                raise ValueError(f"exhibitor {key!r} must be a string")
            values[key] = value
        return cls(id=values["id"], name=values["name"], access_code=values["accessCode"])
