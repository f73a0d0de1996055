"""Traits: typed access to reserved fields of an OrderedDocument.

Traits can hold anything, but reserved fields carry semantic meaning for
downstream consumers (an ``email`` trait is expected to be an email
address), so use them only for their intended purpose. Custom fields go
through :meth:`Traits.put_value`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..device import DeviceIdProvider
from ..document.ordered import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, OrderedDocument
from ..errors import TypeMismatchError
from .iso8601 import format_instant
from .schema import ADDRESS_KEYS, FIELDS, IDENTITY_KEYS, FieldKind, TraitField

_INT_RANGES = {
    FieldKind.INT32: (INT32_MIN, INT32_MAX, "a 32-bit integer"),
    FieldKind.INT64: (INT64_MIN, INT64_MAX, "a 64-bit integer"),
}


@dataclass(frozen=True)
class Address:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_document(cls, doc: OrderedDocument) -> Address:
        return cls(
            street=doc.get_string("street"),
            city=doc.get_string("city"),
            state=doc.get_string("state"),
            postal_code=doc.get_string("postalCode"),
            country=doc.get_string("country"),
        )


def _check_string(field: TraitField, value: Any) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise TypeMismatchError(field.key, "a string", value)
    return value


class Traits:
    """Typed overlay over an :class:`OrderedDocument` of user or group traits.

    Putters return the same instance so calls can be chained::

        traits = Traits().put_email("a@x.com").put_name("A")

    Getters return None for fields that were never set. Identity fields
    (``userId``, ``anonymousId``) are read-only here; see
    :class:`analytics_traits.traits.identity.IdentityWriter`.
    """

    def __init__(self, document: OrderedDocument | None = None):
        self._document = document if document is not None else OrderedDocument()

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_device(cls, device_id: DeviceIdProvider) -> Traits:
        """First-run traits: the device id becomes both userId and anonymousId."""
        from .identity import IdentityWriter

        id_ = device_id()
        traits = cls()
        IdentityWriter.grant(traits).put_user_id(id_).put_anonymous_id(id_)
        return traits

    @classmethod
    def parse(cls, text: str | bytes) -> Traits:
        return cls(OrderedDocument.parse(text))

    @classmethod
    def from_document(cls, doc: OrderedDocument) -> Traits:
        """Wrap a copy of ``doc``; later changes to ``doc`` are not seen."""
        return cls(doc.copy())

    @property
    def document(self) -> OrderedDocument:
        """The underlying document. Raw puts here bypass all typing."""
        return self._document

    # ── Generic field plumbing ───────────────────────────────────────────

    def _put(self, field: TraitField, value: Any) -> Traits:
        kind = field.kind
        if kind is FieldKind.STRING:
            value = _check_string(field, value)
        elif kind in _INT_RANGES:
            lo, hi, expected = _INT_RANGES[kind]
            if isinstance(value, bool) or not isinstance(value, int) or not lo <= value <= hi:
                raise TypeMismatchError(field.key, expected, value)
        elif kind is FieldKind.ISO8601:
            value = format_instant(value, field.key)
        else:
            raise ValueError(f"Field {field.name!r} cannot be put directly")
        self._document.put(field.key, value)
        return self

    def _get(self, field: TraitField) -> Any:
        doc = self._document
        if field.kind in (FieldKind.STRING, FieldKind.ISO8601):
            return doc.get_string(field.key)
        if field.kind is FieldKind.INT32:
            return doc.get_int(field.key)
        if field.kind is FieldKind.INT64:
            return doc.get_long(field.key)
        nested = doc.get_document(field.key)
        return Address.from_document(nested) if nested is not None else None

    def get_field(self, name: str) -> Any:
        """Typed value of the reserved field called ``name`` (e.g. ``"email"``)."""
        return self._get(FIELDS[name])

    def put_value(self, key: str, value: Any) -> Traits:
        """Raw put of any document value; returns self for chaining."""
        self._document.put(key, value)
        return self

    def merge(self, other: Traits) -> Traits:
        """Copy the fields of ``other`` into this instance, in its order.

        Identity fields of ``other`` are skipped; they only change through
        an IdentityWriter.
        """
        incoming = other.document.copy()
        for key in IDENTITY_KEYS:
            incoming.remove(key)
        self._document.update(incoming)
        return self

    # ── Address ──────────────────────────────────────────────────────────

    def put_address(
        self,
        street: Optional[str],
        city: Optional[str],
        state: Optional[str],
        postal_code: Optional[str],
        country: Optional[str],
    ) -> Traits:
        """Store all five address components as one nested document.

        Components are stored as given, None included.
        """
        field = FIELDS["address"]
        components = dict(
            city=city, country=country, postalCode=postal_code, state=state, street=street
        )
        nested = OrderedDocument()
        for key in ADDRESS_KEYS:
            nested.put(key, _check_string(field, components[key]))
        self._document.put(field.key, nested)
        return self

    def address(self) -> Optional[Address]:
        return self._get(FIELDS["address"])

    # ── Profile putters ──────────────────────────────────────────────────

    def put_name(self, name: Optional[str]) -> Traits:
        return self._put(FIELDS["name"], name)

    def put_first_name(self, first_name: Optional[str]) -> Traits:
        return self._put(FIELDS["first_name"], first_name)

    def put_last_name(self, last_name: Optional[str]) -> Traits:
        return self._put(FIELDS["last_name"], last_name)

    def put_username(self, username: Optional[str]) -> Traits:
        return self._put(FIELDS["username"], username)

    def put_email(self, email: Optional[str]) -> Traits:
        return self._put(FIELDS["email"], email)

    def put_phone(self, phone: Optional[str]) -> Traits:
        return self._put(FIELDS["phone"], phone)

    def put_fax(self, fax: Optional[str]) -> Traits:
        return self._put(FIELDS["fax"], fax)

    def put_website(self, website: Optional[str]) -> Traits:
        return self._put(FIELDS["website"], website)

    def put_avatar(self, avatar: Optional[str]) -> Traits:
        return self._put(FIELDS["avatar"], avatar)

    def put_description(self, description: Optional[str]) -> Traits:
        return self._put(FIELDS["description"], description)

    def put_created_at(self, created_at: Optional[str]) -> Traits:
        """``created_at`` must already be ISO-8601 text; it is stored as is."""
        return self._put(FIELDS["created_at"], created_at)

    def put_birthday(self, birthday: date | datetime) -> Traits:
        """Store ``birthday`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (UTC).

        Accepts a timezone-aware datetime or a date (midnight UTC).
        """
        return self._put(FIELDS["birthday"], birthday)

    def put_age(self, age: int) -> Traits:
        return self._put(FIELDS["age"], age)

    def put_gender(self, gender: Optional[str]) -> Traits:
        return self._put(FIELDS["gender"], gender)

    def put_title(self, title: Optional[str]) -> Traits:
        return self._put(FIELDS["title"], title)

    # Group traits

    def put_employees(self, employees: int) -> Traits:
        return self._put(FIELDS["employees"], employees)

    def put_industry(self, industry: Optional[str]) -> Traits:
        return self._put(FIELDS["industry"], industry)

    # ── Getters ──────────────────────────────────────────────────────────

    def user_id(self) -> Optional[str]:
        return self._get(FIELDS["user_id"])

    def anonymous_id(self) -> Optional[str]:
        return self._get(FIELDS["anonymous_id"])

    def name(self) -> Optional[str]:
        # No fallback to first/last name; consumers have not agreed on a format.
        return self._get(FIELDS["name"])

    def first_name(self) -> Optional[str]:
        return self._get(FIELDS["first_name"])

    def last_name(self) -> Optional[str]:
        return self._get(FIELDS["last_name"])

    def username(self) -> Optional[str]:
        return self._get(FIELDS["username"])

    def email(self) -> Optional[str]:
        return self._get(FIELDS["email"])

    def phone(self) -> Optional[str]:
        return self._get(FIELDS["phone"])

    def fax(self) -> Optional[str]:
        return self._get(FIELDS["fax"])

    def website(self) -> Optional[str]:
        return self._get(FIELDS["website"])

    def avatar(self) -> Optional[str]:
        return self._get(FIELDS["avatar"])

    def description(self) -> Optional[str]:
        return self._get(FIELDS["description"])

    def created_at(self) -> Optional[str]:
        return self._get(FIELDS["created_at"])

    def birthday(self) -> Optional[str]:
        return self._get(FIELDS["birthday"])

    def age(self) -> Optional[int]:
        return self._get(FIELDS["age"])

    def gender(self) -> Optional[str]:
        return self._get(FIELDS["gender"])

    def title(self) -> Optional[str]:
        return self._get(FIELDS["title"])

    def employees(self) -> Optional[int]:
        return self._get(FIELDS["employees"])

    def industry(self) -> Optional[str]:
        return self._get(FIELDS["industry"])

    # ── Serialization ────────────────────────────────────────────────────

    def serialize(self, indent: int | None = None) -> str:
        return self._document.serialize(indent=indent)

    def copy(self) -> Traits:
        return Traits(self._document.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Traits):
            return NotImplemented
        return self._document == other._document

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Traits({self._document.serialize()})"
