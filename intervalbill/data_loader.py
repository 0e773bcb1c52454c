import csv
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Union

import pandas as pd

from .errors import ParseError
from .models import EnergyRow

logger = logging.getLogger(__name__)

# Plain decimal notation only: no padding, digit separators, nan or inf
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


def parse_decimal(text: str, source: str = "", row=None, column=None) -> float:
    if not _DECIMAL.fullmatch(text):
        raise ParseError(f"expected a number, got {text!r}", source, row, column)
    return float(text)


def parse_integer(text: str, source: str = "", row=None, column=None) -> int:
    if not _INTEGER.fullmatch(text):
        raise ParseError(f"expected an integer, got {text!r}", source, row, column)
    return int(text)


def read_text_table(path: Union[str, Path], allow_empty: bool = False) -> pd.DataFrame:
    """
    Reads a small CSV table with every cell as text (header row skipped).

    Malformed files raise ParseError naming the file. An empty file is an
    error unless `allow_empty` is set, in which case an empty frame comes back.
    """
    try:
        # header=None so a data row wider than the header is a parser error, not an implicit index
        raw = pd.read_csv(path, dtype=str, keep_default_na=False, header=None, encoding="utf-8-sig")
    except pd.errors.EmptyDataError as e:
        if allow_empty:
            logger.warning("read_text_table: %s is empty", path)
            return pd.DataFrame()
        raise ParseError("file is empty", str(path)) from e
    except pd.errors.ParserError as e:
        raise ParseError(f"malformed CSV: {e}", str(path)) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"not valid UTF-8: {e.reason} at byte {e.start}", str(path)) from e

    table = raw.iloc[1:].reset_index(drop=True)
    table.columns = [str(c) for c in raw.iloc[0].tolist()]
    return table


def parse_energy_rows(records: Iterable[List[str]]) -> Iterator[EnergyRow]:
    """
    Turns raw CSV records (header already consumed) into EnergyRow objects.

    Blank records are skipped and do not count as data rows. Cell text is kept
    as-is; numeric parsing happens while pricing so that errors carry the row
    and column they came from.
    """
    line_no = 0
    for record in records:
        if not record:
            continue
        yield EnergyRow(line_no=line_no, date=record[0].strip(), readings=tuple(record[1:]))
        line_no += 1


def read_energy_rows(file_path: Union[str, Path]) -> Iterator[EnergyRow]:
    """Streams the rows of a wide energy CSV: date, then one reading per interval."""
    logger.info("read_energy_rows: loading CSV file %s", file_path)
    with open(file_path, "r", newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        try:
            header = next(reader, None)
            if header is None:
                return
            logger.debug("read_energy_rows: header has %d columns", len(header))
            yield from parse_energy_rows(reader)
        except UnicodeDecodeError as e:
            raise ParseError(f"not valid UTF-8: {e.reason}", str(file_path)) from e
        except csv.Error as e:
            raise ParseError(f"malformed CSV on file line {reader.line_num}: {e}", str(file_path)) from e
