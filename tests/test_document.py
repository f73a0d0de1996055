"""Tests for the ordered document container."""

import pytest

from analytics_traits.document.ordered import OrderedDocument
from analytics_traits.errors import MalformedDocumentError, TypeMismatchError


@pytest.fixture
def doc():
    return (
        OrderedDocument()
        .put("name", "Ada")
        .put("age", 36)
        .put("score", 9.5)
        .put("active", True)
        .put("nickname", None)
        .put("tags", ["a", 1, None, {"deep": [True]}])
        .put("nested", {"z": 1, "a": {"b": "c"}})
    )


class TestPut:
    def test_put_returns_self(self):
        d = OrderedDocument()
        assert d.put("a", 1) is d

    def test_overwrite_keeps_position(self):
        d = OrderedDocument().put("a", 1).put("b", 2).put("a", 3)
        assert list(d.keys()) == ["a", "b"]
        assert d["a"] == 3

    def test_rejects_bad_keys(self):
        with pytest.raises(ValueError):
            OrderedDocument().put("", 1)
        with pytest.raises(ValueError):
            OrderedDocument().put(5, 1)

    def test_rejects_values_outside_domain(self):
        d = OrderedDocument()
        with pytest.raises(TypeMismatchError):
            d.put("s", {1, 2})
        with pytest.raises(TypeMismatchError):
            d.put("f", float("nan"))
        with pytest.raises(TypeMismatchError):
            d.put("l", [object()])
        assert len(d) == 0

    def test_mappings_become_documents(self, doc):
        assert isinstance(doc["nested"], OrderedDocument)
        assert isinstance(doc["nested"]["a"], OrderedDocument)
        assert isinstance(doc["tags"][3], OrderedDocument)

    def test_tuples_become_lists(self):
        d = OrderedDocument().put("t", (1, 2))
        assert d["t"] == [1, 2]

    def test_update_is_all_or_nothing(self):
        d = OrderedDocument().put("keep", 1)
        with pytest.raises(TypeMismatchError):
            d.update({"x": 1, "y": object()})
        assert list(d.keys()) == ["keep"]

    def test_remove(self, doc):
        assert doc.remove("name") == "Ada"
        assert doc.remove("name") is None
        assert "name" not in doc

    def test_copy_is_deep(self, doc):
        c = doc.copy()
        c.get_document("nested").put("z", 2)
        c.get_list("tags").append("new")
        assert doc["nested"]["z"] == 1
        assert len(doc["tags"]) == 4
        assert c != doc


class TestTypedGet:
    def test_missing_and_null_are_absent(self, doc):
        assert doc.get_string("missing") is None
        assert doc.get_int("missing") is None
        assert doc.get_string("nickname") is None
        assert doc.get_document("nickname") is None

    def test_string(self, doc):
        assert doc.get_string("name") == "Ada"
        assert doc.get_string("age") == "36"
        with pytest.raises(TypeMismatchError):
            doc.get_string("active")
        with pytest.raises(TypeMismatchError):
            doc.get_string("nested")

    def test_int_coercion(self):
        d = OrderedDocument().put("s", " 42 ").put("f", 2.0).put("half", 2.5)
        assert d.get_int("s") == 42
        assert d.get_int("f") == 2
        with pytest.raises(TypeMismatchError):
            d.get_int("half")

    def test_int_mismatch(self):
        d = OrderedDocument().put("age", "old").put("flag", True)
        with pytest.raises(TypeMismatchError) as exc:
            d.get_int("age")
        assert exc.value.key == "age"
        with pytest.raises(TypeMismatchError):
            d.get_int("flag")

    def test_int_ranges(self):
        d = OrderedDocument().put("big", 2**31)
        with pytest.raises(TypeMismatchError):
            d.get_int("big")
        assert d.get_long("big") == 2**31
        d.put("huge", 2**63)
        with pytest.raises(TypeMismatchError):
            d.get_long("huge")

    def test_float(self, doc):
        assert doc.get_float("score") == 9.5
        assert doc.get_float("age") == 36.0
        d = OrderedDocument().put("s", "1.5").put("bad", "abc").put("inf", "inf")
        assert d.get_float("s") == 1.5
        with pytest.raises(TypeMismatchError):
            d.get_float("bad")
        with pytest.raises(TypeMismatchError):
            d.get_float("inf")

    @pytest.mark.parametrize("text", ["1_000", "\u0661\u0662", "0x10", "1e3", ""])
    def test_int_text_must_be_ascii_decimal(self, text):
        d = OrderedDocument().put("age", text)
        with pytest.raises(TypeMismatchError):
            d.get_int("age")

    @pytest.mark.parametrize("text", ["1_000.5", "\u0661.5", "nan", "Infinity", "1e999"])
    def test_float_text_must_be_ascii_decimal(self, text):
        d = OrderedDocument().put("score", text)
        with pytest.raises(TypeMismatchError):
            d.get_float("score")

    def test_float_text_forms(self):
        d = OrderedDocument().put("a", "-2.5e3").put("b", ".5").put("c", "+7")
        assert d.get_float("a") == -2500.0
        assert d.get_float("b") == 0.5
        assert d.get_float("c") == 7.0

    def test_bool(self, doc):
        assert doc.get_bool("active") is True
        d = OrderedDocument().put("s", "FALSE").put("n", 1)
        assert d.get_bool("s") is False
        with pytest.raises(TypeMismatchError):
            d.get_bool("n")

    def test_document_and_list(self, doc):
        assert doc.get_document("nested").get_string("z") == "1"
        assert doc.get_list("tags")[0] == "a"
        with pytest.raises(TypeMismatchError):
            doc.get_document("tags")
        with pytest.raises(TypeMismatchError):
            doc.get_list("nested")

    def test_mismatch_is_a_type_error(self):
        d = OrderedDocument().put("age", "old")
        with pytest.raises(TypeError):
            d.get_int("age")


class TestSerialization:
    def test_compact_canonical_text(self):
        d = OrderedDocument().put("b", 1).put("a", "x").put("c", {"k": None})
        assert d.serialize() == '{"b":1,"a":"x","c":{"k":null}}'

    def test_round_trip_preserves_values_and_order(self, doc):
        back = OrderedDocument.parse(doc.serialize())
        assert back == doc
        assert list(back.keys()) == list(doc.keys())
        assert list(back["nested"].keys()) == ["z", "a"]

    def test_round_trip_with_indent(self, doc):
        text = doc.serialize(indent=2)
        assert "\n" in text
        assert OrderedDocument.parse(text) == doc

    def test_unicode_is_written_verbatim(self):
        d = OrderedDocument().put("city", "Zürich")
        assert "Zürich" in d.serialize()
        assert OrderedDocument.parse(d.serialize().encode("utf-8")) == d

    def test_equality_is_order_sensitive(self):
        a = OrderedDocument().put("a", 1).put("b", 2)
        b = OrderedDocument().put("b", 2).put("a", 1)
        assert a != b
        assert a.to_dict() == b.to_dict()

    def test_equality_respects_json_kind(self):
        assert OrderedDocument().put("x", True) != OrderedDocument().put("x", 1)
        assert OrderedDocument().put("x", 1) != OrderedDocument().put("x", 1.0)
        assert OrderedDocument().put("x", [0]) != OrderedDocument().put("x", [False])
        nested_a = OrderedDocument().put("n", {"y": 1})
        nested_b = OrderedDocument().put("n", {"y": 1.0})
        assert nested_a != nested_b
        assert nested_a == OrderedDocument.parse(nested_a.serialize())

    def test_duplicate_keys_last_value_first_position(self):
        d = OrderedDocument.parse('{"a":1,"b":2,"a":3}')
        assert list(d.keys()) == ["a", "b"]
        assert d["a"] == 3

    @pytest.mark.parametrize(
        "text",
        ["[1, 2]", "\"text\"", "{", "", '{"": 1}', '{"a": NaN}', '{"a": 1e999}'],
    )
    def test_malformed_text(self, text):
        with pytest.raises(MalformedDocumentError):
            OrderedDocument.parse(text)
