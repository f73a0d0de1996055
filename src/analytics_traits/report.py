"""Console table formatting for stored traits."""

from __future__ import annotations

import json
from typing import Any

from tabulate import tabulate

from .document.ordered import OrderedDocument
from .traits.overlay import Traits
from .traits.schema import FIELDS_BY_KEY, reserved_keys


def _display(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, OrderedDocument):
        return value.serialize()
    # lists may hold nested documents
    return json.dumps(value, ensure_ascii=False, default=OrderedDocument.to_dict)


def format_traits_table(traits: Traits, tablefmt: str = "grid") -> str:
    """Format traits as a console table.

    Reserved fields come first in schema order, then custom fields in
    document order.
    """
    doc = traits.document
    rows = []
    for key in reserved_keys():
        if key in doc:
            rows.append([FIELDS_BY_KEY[key].name, key, _display(doc[key])])
    for key in doc:
        if key not in FIELDS_BY_KEY:
            rows.append(["(custom)", key, _display(doc[key])])

    return tabulate(rows, headers=["Field", "Key", "Value"], tablefmt=tablefmt)
