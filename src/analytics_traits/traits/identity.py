"""IdentityWriter: the only sanctioned way to change userId/anonymousId.

General callers get a :class:`Traits` and can read identity fields but not
set them. The identify workflow and first-run seeding are granted an
IdentityWriter for the traits they manage. Nothing stops a caller from
writing ``traits.put_value("userId", ...)`` directly; that path is not
guarded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .schema import FIELDS

if TYPE_CHECKING:
    from .overlay import Traits


class IdentityWriter:
    def __init__(self, traits: Traits):
        self._traits = traits

    @classmethod
    def grant(cls, traits: Traits) -> IdentityWriter:
        return cls(traits)

    @property
    def traits(self) -> Traits:
        return self._traits

    def _put_identity(self, name: str, value: str) -> IdentityWriter:
        if not isinstance(value, str) or not value:
            raise ValueError(f"{FIELDS[name].key} must be a non-empty string, got {value!r}")
        self._traits._put(FIELDS[name], value)
        return self

    def put_user_id(self, user_id: str) -> IdentityWriter:
        return self._put_identity("user_id", user_id)

    def put_anonymous_id(self, anonymous_id: str) -> IdentityWriter:
        return self._put_identity("anonymous_id", anonymous_id)
