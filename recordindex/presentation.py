"""Text rendering of lookups and the interactive search session."""

from collections.abc import Callable, Iterable

from recordindex.record_store import RecordStore
from recordindex.schemas import Record


PROMPT = "Enter record ID (blank to quit): "


def render_record(record: Record) -> str:
    lines = [f"{record.identifier_name}: {record.identifier}"]
    lines.extend(f"{name}: {value}" for name, value in zip(record.field_names, record.fields))
    return "\n".join(lines)


def render_lookup(store: RecordStore, identifier: str) -> str:
    record = store.get(identifier)
    if record is None:
        return f"Record with ID {identifier} not found."
    return "Record found:\n" + render_record(record)


def render_listing(records: Iterable[Record]) -> str:
    rendered = [render_record(record) for record in records]
    if not rendered:
        return "No records loaded."
    return "\n\n".join(rendered)


def run_search_session(
    store: RecordStore,
    read_line: Callable[[str], str],
    write: Callable[[str], object],
) -> int:
    """Serve lookups until a blank entry or EOF. Returns the number of lookups."""
    lookups = 0
    while True:
        try:
            identifier = read_line(PROMPT).strip()
        except EOFError:
            break
        if not identifier:
            break
        write(render_lookup(store, identifier) + "\n")
        lookups += 1
    return lookups
