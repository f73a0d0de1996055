"""OrderedDocument: an insertion-ordered, JSON-backed key/value container.

Values are limited to what JSON can carry losslessly: strings, integers,
finite floats, booleans, None, nested documents and lists of those.
Plain mappings are converted to nested documents on the way in, so a
document always compares equal to ``OrderedDocument.parse(doc.serialize())``.
"""

from __future__ import annotations

import copy
import json
import math
import re
from collections.abc import Iterator, Mapping
from typing import Any, Callable, Optional

from ..errors import MalformedDocumentError, TypeMismatchError

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

# ASCII decimal text only; "1_000" and non-ASCII digits are rejected.
_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _check_key(key: str) -> None:
    if not isinstance(key, str):
        raise ValueError(f"Document keys must be strings, got {type(key).__name__}")
    if not key:
        raise ValueError("Document keys must be non-empty")


def _normalize(key: str, value: Any) -> Any:
    """Convert ``value`` into the document value domain or raise."""
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise TypeMismatchError(key, "a finite float", value)
        return value
    if isinstance(value, OrderedDocument):
        return value
    if isinstance(value, Mapping):
        return OrderedDocument(value)
    if isinstance(value, (list, tuple)):
        return [_normalize(key, item) for item in value]
    raise TypeMismatchError(key, "a JSON-compatible value", value)


def _plain(value: Any) -> Any:
    if isinstance(value, OrderedDocument):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _json_kind(value: Any) -> type:
    for kind in (bool, int, float, str, list, OrderedDocument):
        if isinstance(value, kind):
            return kind
    return type(value)


def _same(a: Any, b: Any) -> bool:
    """Equal values of the same JSON kind, so ``True``, ``1`` and ``1.0`` differ."""
    if _json_kind(a) is not _json_kind(b):
        return False
    if isinstance(a, list):
        return len(a) == len(b) and all(_same(x, y) for x, y in zip(a, b))
    return a == b


def _coerce_integer(key: str, value: Any, lo: int, hi: int, expected: str) -> int:
    if isinstance(value, bool):
        raise TypeMismatchError(key, expected, value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and _INT_TEXT.fullmatch(value.strip()):
        try:
            number = int(value.strip())
        except ValueError:
            # longer than int's digit limit
            raise TypeMismatchError(key, expected, value) from None
    else:
        raise TypeMismatchError(key, expected, value)
    if not lo <= number <= hi:
        raise TypeMismatchError(key, expected, value)
    return number


class OrderedDocument(Mapping):
    """String-keyed, insertion-ordered document of JSON-compatible values.

    Overwriting a key keeps its original position. Typed getters return
    ``None`` for missing keys and raise :class:`TypeMismatchError` when a
    stored value cannot be coerced to the requested type.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values: dict[str, Any] = {}
        if values is not None:
            self.update(values)

    # ── Mapping protocol ─────────────────────────────────────────────────

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedDocument):
            return NotImplemented
        if list(self._values) != list(other._values):
            return False
        return all(_same(v, other._values[k]) for k, v in self._values.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"OrderedDocument({self.serialize()})"

    # ── Mutation ─────────────────────────────────────────────────────────

    def put(self, key: str, value: Any) -> OrderedDocument:
        """Insert or overwrite ``key``; returns self for chaining."""
        _check_key(key)
        self._values[key] = _normalize(key, value)
        return self

    def update(self, other: Mapping[str, Any]) -> OrderedDocument:
        """Put every entry of ``other`` in its iteration order.

        All entries are validated before any is written.
        """
        staged = []
        for key, value in other.items():
            _check_key(key)
            staged.append((key, _normalize(key, value)))
        for key, value in staged:
            self._values[key] = value
        return self

    def remove(self, key: str) -> Any:
        """Remove ``key`` and return its value, or None if it was absent."""
        return self._values.pop(key, None)

    def copy(self) -> OrderedDocument:
        """Deep copy; nested documents and lists are not shared."""
        return copy.deepcopy(self)

    # ── Typed access ─────────────────────────────────────────────────────

    def _typed(self, key: str, coerce: Callable[[str, Any], Any]) -> Optional[Any]:
        value = self._values.get(key)
        if value is None:
            return None
        return coerce(key, value)

    def get_string(self, key: str) -> Optional[str]:
        def coerce(k: str, v: Any) -> str:
            if isinstance(v, str):
                return v
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                return str(v)
            raise TypeMismatchError(k, "a string", v)

        return self._typed(key, coerce)

    def get_int(self, key: str) -> Optional[int]:
        """32-bit integer value of ``key``."""
        return self._typed(
            key, lambda k, v: _coerce_integer(k, v, INT32_MIN, INT32_MAX, "a 32-bit integer")
        )

    def get_long(self, key: str) -> Optional[int]:
        """64-bit integer value of ``key``."""
        return self._typed(
            key, lambda k, v: _coerce_integer(k, v, INT64_MIN, INT64_MAX, "a 64-bit integer")
        )

    def get_float(self, key: str) -> Optional[float]:
        def coerce(k: str, v: Any) -> float:
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                return float(v)
            if isinstance(v, str) and _FLOAT_TEXT.fullmatch(v.strip()):
                number = float(v.strip())
                if math.isfinite(number):
                    return number
            raise TypeMismatchError(k, "a number", v)

        return self._typed(key, coerce)

    def get_bool(self, key: str) -> Optional[bool]:
        def coerce(k: str, v: Any) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, str) and v.lower() in ("true", "false"):
                return v.lower() == "true"
            raise TypeMismatchError(k, "a boolean", v)

        return self._typed(key, coerce)

    def get_document(self, key: str) -> Optional[OrderedDocument]:
        def coerce(k: str, v: Any) -> OrderedDocument:
            if isinstance(v, OrderedDocument):
                return v
            raise TypeMismatchError(k, "a nested document", v)

        return self._typed(key, coerce)

    def get_list(self, key: str) -> Optional[list]:
        def coerce(k: str, v: Any) -> list:
            if isinstance(v, list):
                return v
            raise TypeMismatchError(k, "a list", v)

        return self._typed(key, coerce)

    # ── Serialization ────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dicts/lists, in key order."""
        return {key: _plain(value) for key, value in self._values.items()}

    def serialize(self, indent: int | None = None) -> str:
        """Canonical JSON text. Compact unless ``indent`` is given."""
        separators = (",", ":") if indent is None else (",", ": ")
        return json.dumps(
            self.to_dict(),
            indent=indent,
            separators=separators,
            ensure_ascii=False,
            allow_nan=False,
        )

    @classmethod
    def parse(cls, text: str | bytes) -> OrderedDocument:
        """Parse canonical JSON text; the top level must be an object."""
        try:
            parsed = json.loads(
                text,
                object_pairs_hook=_from_pairs,
                parse_constant=_reject_constant,
            )
        except MalformedDocumentError:
            raise
        except (ValueError, TypeMismatchError) as e:
            # invalid JSON, empty keys and overflowing floats
            raise MalformedDocumentError(f"Cannot parse document: {e}") from e
        if not isinstance(parsed, OrderedDocument):
            raise MalformedDocumentError(
                f"Document text must hold a JSON object, got {type(parsed).__name__}"
            )
        return parsed


def _from_pairs(pairs: list[tuple[str, Any]]) -> OrderedDocument:
    doc = OrderedDocument()
    for key, value in pairs:
        doc.put(key, value)
    return doc


def _reject_constant(name: str) -> None:
    raise MalformedDocumentError(f"Non-finite number {name} is not allowed")
