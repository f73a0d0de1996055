"""Reserved trait fields: one immutable table shared by every accessor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class FieldKind(str, Enum):
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    ISO8601 = "iso8601"  # stored as text, birthday putter formats dates
    ADDRESS = "address"


@dataclass(frozen=True)
class TraitField:
    """A reserved trait: Python-side name, wire key and value kind.

    Identity fields are readable by anyone but only writable through
    :class:`analytics_traits.traits.identity.IdentityWriter`.
    """

    name: str
    key: str
    kind: FieldKind = FieldKind.STRING
    identity: bool = False
    group: bool = False


_FIELDS = (
    # ── Identity ─────────────────────────────────────────────────────────
    TraitField("user_id", "userId", identity=True),
    TraitField("anonymous_id", "anonymousId", identity=True),
    # ── Profile ──────────────────────────────────────────────────────────
    TraitField("name", "name"),
    TraitField("first_name", "firstName"),
    TraitField("last_name", "lastName"),
    TraitField("username", "username"),
    TraitField("email", "email"),
    TraitField("phone", "phone"),
    TraitField("fax", "fax"),
    TraitField("website", "website"),
    TraitField("avatar", "avatar"),  # URL
    TraitField("description", "description"),
    TraitField("created_at", "createdAt"),  # caller pre-formats ISO-8601
    TraitField("birthday", "birthday", FieldKind.ISO8601),
    TraitField("age", "age", FieldKind.INT32),
    TraitField("gender", "gender"),
    TraitField("title", "title"),
    TraitField("address", "address", FieldKind.ADDRESS),
    # ── Group traits ─────────────────────────────────────────────────────
    TraitField("employees", "employees", FieldKind.INT64, group=True),
    TraitField("industry", "industry", group=True),
)

FIELDS: MappingProxyType[str, TraitField] = MappingProxyType({f.name: f for f in _FIELDS})
FIELDS_BY_KEY: MappingProxyType[str, TraitField] = MappingProxyType({f.key: f for f in _FIELDS})

IDENTITY_KEYS = frozenset(f.key for f in _FIELDS if f.identity)

# Sub-keys of the nested address document, in stored order.
ADDRESS_KEYS = ("city", "country", "postalCode", "state", "street")


def reserved_keys() -> tuple[str, ...]:
    """Wire keys of all reserved fields, in table order."""
    return tuple(f.key for f in _FIELDS)
