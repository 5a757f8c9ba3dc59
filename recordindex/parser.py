from recordindex.errors import ConfigurationError, MalformedRecordError
from recordindex.schemas import Column, FieldValue, Record, RecordLayout


class RecordParser:
    """Turns one delimited data line into a Record.

    The split is a plain split on the delimiter: quoted columns that
    contain the delimiter are not supported.
    """

    def __init__(self, layout: RecordLayout, delimiter: str = ",") -> None:
        if not delimiter:
            raise ConfigurationError("delimiter must not be empty")
        self.layout = layout
        self.delimiter = delimiter
        self._field_names = tuple(column.name for column in layout.field_columns)
        self._identifier_name = layout.identifier_column.name

    def parse(self, line: str, line_number: int | None = None) -> Record:
        raw = line.rstrip("\r\n")
        parts = [part.strip() for part in raw.split(self.delimiter)]
        if len(parts) != len(self.layout):
            raise MalformedRecordError(
                f"expected {len(self.layout)} columns, got {len(parts)}",
                raw,
                line_number,
            )

        identifier = parts[0]
        if not identifier:
            raise MalformedRecordError("identifier is required", raw, line_number)

        values: list[FieldValue] = []
        for column, text in zip(self.layout.field_columns, parts[1:]):
            try:
                values.append(_coerce(column, text))
            except ValueError:
                raise MalformedRecordError(
                    f"{column.name} must be {'an integer' if column.kind == 'int' else 'a number'}",
                    raw,
                    line_number,
                ) from None

        return Record(
            identifier=identifier,
            fields=tuple(values),
            field_names=self._field_names,
            identifier_name=self._identifier_name,
        )


def _coerce(column: Column, text: str) -> FieldValue:
    if column.kind == "int":
        return int(text)
    if column.kind == "float":
        return float(text)
    return text
