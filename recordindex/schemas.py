from dataclasses import dataclass, field

from recordindex.errors import ConfigurationError


FieldValue = str | int | float

COLUMN_KINDS = ("text", "int", "float")


@dataclass(frozen=True)
class Column:
    name: str
    kind: str = "text"


@dataclass(frozen=True)
class RecordLayout:
    """Ordered column definitions for one data line. Column 0 is the identifier."""

    columns: tuple[Column, ...]

    def __post_init__(self) -> None:
        if not self.columns:
            raise ConfigurationError("record layout needs at least an identifier column")
        if self.columns[0].kind != "text":
            raise ConfigurationError("identifier column must be text")
        names = [column.name for column in self.columns]
        if not all(names):
            raise ConfigurationError(f"empty column name in layout: {names}")
        if len(set(names)) != len(names):
            raise ConfigurationError(f"duplicate column names in layout: {names}")
        for column in self.columns:
            if column.kind not in COLUMN_KINDS:
                raise ConfigurationError(f"unknown column kind {column.kind!r} for {column.name!r}")

    @classmethod
    def from_spec(cls, spec: str) -> "RecordLayout":
        columns: list[Column] = []
        for part in spec.split(","):
            part = part.strip()
            if not part:
                continue
            name, _, kind = part.partition(":")
            columns.append(Column(name=name.strip(), kind=kind.strip().lower() or "text"))
        return cls(tuple(columns))

    @property
    def identifier_column(self) -> Column:
        return self.columns[0]

    @property
    def field_columns(self) -> tuple[Column, ...]:
        return self.columns[1:]

    def __len__(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class Record:
    identifier: str
    fields: tuple[FieldValue, ...]
    field_names: tuple[str, ...] = field(default=(), compare=False)
    identifier_name: str = field(default="id", compare=False)

    def value(self, name: str) -> FieldValue:
        try:
            return self.fields[self.field_names.index(name)]
        except ValueError:
            raise KeyError(name) from None

    def as_dict(self) -> dict[str, FieldValue]:
        row: dict[str, FieldValue] = {self.identifier_name: self.identifier}
        row.update(zip(self.field_names, self.fields))
        return row


@dataclass(frozen=True)
class LoadFailure:
    line_number: int
    line: str
    reason: str


@dataclass
class LoadReport:
    source: str
    lines_processed: int = 0
    records_stored: int = 0
    records_replaced: int = 0
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def parse_failures(self) -> int:
        return len(self.failures)
