import pytest

from recordindex.errors import ConfigurationError, MalformedRecordError
from recordindex.parser import RecordParser
from recordindex.schemas import RecordLayout


def test_parse_splits_identifier_and_typed_fields(parser: RecordParser) -> None:
    record = parser.parse("A1, Alpha ,10\n")

    assert record.identifier == "A1"
    assert record.fields == ("Alpha", 10)
    assert record.value("score") == 10
    assert record.as_dict() == {"id": "A1", "name": "Alpha", "score": 10}


def test_parse_float_columns() -> None:
    parser = RecordParser(RecordLayout.from_spec("id,title,rating:float"))

    record = parser.parse("S9,Song,4.5\r\n")

    assert record.fields == ("Song", 4.5)


def test_parse_rejects_wrong_column_count(parser: RecordParser) -> None:
    with pytest.raises(MalformedRecordError) as excinfo:
        parser.parse("A1,Alpha", line_number=7)

    assert excinfo.value.reason == "expected 3 columns, got 2"
    assert excinfo.value.line == "A1,Alpha"
    assert excinfo.value.line_number == 7


def test_parse_rejects_bad_numeric_column(parser: RecordParser) -> None:
    with pytest.raises(MalformedRecordError) as excinfo:
        parser.parse("A2,Beta,bad")

    assert excinfo.value.reason == "score must be an integer"


def test_parse_rejects_empty_identifier(parser: RecordParser) -> None:
    with pytest.raises(MalformedRecordError) as excinfo:
        parser.parse(" ,Nameless,1")

    assert excinfo.value.reason == "identifier is required"


def test_record_value_unknown_name_raises_key_error(parser: RecordParser) -> None:
    record = parser.parse("A1,Alpha,10")

    with pytest.raises(KeyError):
        record.value("missing")


def test_empty_delimiter_is_a_configuration_error(layout: RecordLayout) -> None:
    with pytest.raises(ConfigurationError):
        RecordParser(layout, delimiter="")


def test_identifier_name_comes_from_layout() -> None:
    parser = RecordParser(RecordLayout.from_spec("song_id,title"))

    record = parser.parse("S1,Intro")

    assert record.identifier_name == "song_id"
    assert record.as_dict() == {"song_id": "S1", "title": "Intro"}


def test_custom_delimiter() -> None:
    parser = RecordParser(RecordLayout.from_spec("id,name"), delimiter=";")

    assert parser.parse("X;Y").fields == ("Y",)


@pytest.mark.parametrize(
    "spec",
    ["", "id:int,name", "id,name,name", "id,score:decimal", "id,:int"],
)
def test_invalid_layouts_are_rejected(spec: str) -> None:
    with pytest.raises(ConfigurationError):
        RecordLayout.from_spec(spec)
