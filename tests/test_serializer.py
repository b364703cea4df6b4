import pytest
from pydantic import BaseModel, ConfigDict

from tokensign.errors import DeserializationError
from tokensign.serializer import JSONSerializer, deserialize, serialize, to_json_value


class Book(BaseModel):
    title: str
    author: str
    year: int


class StrictBook(Book):
    model_config = ConfigDict(extra="forbid")


def test_serialize_is_compact_and_keeps_insertion_order():
    assert serialize({"b": 1, "a": [True, None]}) == b'{"b":1,"a":[true,null]}'


def test_serialize_model_uses_declaration_order():
    book = Book(year=1954, author="J. R. R. Tolkien", title="The Lord of the Rings")
    assert serialize(book) == b'{"title":"The Lord of the Rings","author":"J. R. R. Tolkien","year":1954}'


def test_serialize_keeps_unicode():
    assert serialize({"name": "Łódź"}) == '{"name":"Łódź"}'.encode("utf-8")


def test_to_json_value_coerces_keys():
    assert to_json_value({None: 1, True: 2, False: 3, 4: 5}) == {"null": 1, "true": 2, "false": 3, "4": 5}


def test_to_json_value_converts_tuples():
    assert to_json_value((1, (2, 3))) == [1, [2, 3]]


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), {1, 2}, b"bytes", object()])
def test_to_json_value_rejects_unsupported(bad):
    with pytest.raises(TypeError):
        to_json_value({"v": bad})


def test_deserialize_plain_json():
    assert deserialize(b'{"a":[1,2.5,"x"]}') == {"a": [1, 2.5, "x"]}


@pytest.mark.parametrize("bad", [b"{not json", b"", b"\xc3\x28"])
def test_deserialize_rejects_malformed(bad):
    with pytest.raises(DeserializationError):
        deserialize(bad)


def test_deserialize_into_model():
    raw = b'{"title":"Dune","author":"Frank Herbert","year":1965}'
    assert deserialize(raw, model=Book) == Book(title="Dune", author="Frank Herbert", year=1965)


@pytest.mark.parametrize(
    "raw",
    [
        b'{"title":"Dune","author":"Frank Herbert"}',
        b'{"title":"Dune","author":"Frank Herbert","year":"soon"}',
        b'{"title":"Dune","author":"Frank Herbert","year":1965,"isbn":"x"}',
    ],
)
def test_deserialize_shape_mismatch(raw):
    with pytest.raises(DeserializationError):
        deserialize(raw, model=StrictBook)


def test_json_serializer_methods():
    s = JSONSerializer()
    assert s.deserialize(s.serialize({"x": 1})) == {"x": 1}
