"""Loading of memory traces: one ``process_id,virtual_address`` pair per line."""

from typing import NamedTuple

from errors import ConfigError, TraceFileError, TraceParseError


class AccessRecord(NamedTuple):
    process_id: int
    page_number: int


def page_shift(page_size):
    """Number of offset bits for ``page_size``, which must be a power of two."""
    if page_size < 1 or page_size & (page_size - 1):
        raise ConfigError(f"page size must be a positive power of two, got {page_size}")
    return page_size.bit_length() - 1


def parse_line(line, shift, line_number=0, path='<trace>'):
    parts = line.strip().split(',')
    if len(parts) != 2:
        raise TraceParseError(path, line_number, line.rstrip('\n'),
                              "expected 'process_id,virtual_address'")
    try:
        process_id = int(parts[0])
        address = int(parts[1])
    except ValueError:
        raise TraceParseError(path, line_number, line.rstrip('\n'), "not an integer") from None

    if process_id < 0 or address < 0:
        raise TraceParseError(path, line_number, line.rstrip('\n'), "negative value")
    return AccessRecord(process_id, address >> shift)


def load_trace(filename, page_size):
    """Read the whole trace into memory; blank lines are ignored."""
    shift = page_shift(page_size)
    records = []
    try:
        with open(filename, 'r') as f:
            for line_number, line in enumerate(f, 1):
                if not line.strip():
                    continue
                records.append(parse_line(line, shift, line_number, filename))
    except OSError as e:
        raise TraceFileError(filename, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise TraceFileError(filename, str(e)) from e
    return records


def records_from_pages(pages, process_id=0):
    return [AccessRecord(process_id, page) for page in pages]
