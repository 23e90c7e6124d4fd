"""Record sources: iterate Parquet files or Arrow tables one row at a time."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq


def _check_columns(columns: Sequence[str], available: Sequence[str], *, source: str) -> None:
    names = set(available)
    missing = [c for c in columns if c not in names]
    if missing:
        raise ValueError(f"Columns {missing} not found in {source}; available: {list(available)}")


@dataclass(frozen=True)
class ParquetRecordReader:
    """Read parquet row groups in chunked table batches and yield rows as dicts."""

    parquet_paths: list[str]
    columns: list[str] | None = None
    row_groups_per_chunk: int = 1

    def __post_init__(self) -> None:
        if self.columns is None:
            return
        for path in self.parquet_paths:
            names = pq.ParquetFile(path).schema_arrow.names
            _check_columns(self.columns, names, source=path)

    def _row_group_tasks(self) -> list[tuple[str, int]]:
        tasks: list[tuple[str, int]] = []
        for path in self.parquet_paths:
            pf = pq.ParquetFile(path)
            for rg in range(pf.num_row_groups):
                tasks.append((path, rg))
        return tasks

    def iter_tables(self) -> Iterator[pa.Table]:
        tasks = self._row_group_tasks()
        chunk_span = max(1, int(self.row_groups_per_chunk))
        for i in range(0, len(tasks), chunk_span):
            tables: list[pa.Table] = []
            for path, rg in tasks[i : i + chunk_span]:
                pf = pq.ParquetFile(path)
                tables.append(pf.read_row_group(rg, columns=self.columns))
            table = tables[0] if len(tables) == 1 else pa.concat_tables(tables, promote_options="default")
            yield table.combine_chunks()

    def iter_records(self) -> Iterator[dict[str, Any]]:
        for table in self.iter_tables():
            yield from table.to_pylist()

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return self.iter_records()


def iter_records(
    source: pa.Table | str | Path | Sequence[str | Path],
    columns: list[str] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Iterate rows of an Arrow table or of one or more Parquet files.

    Args:
        source: ``pyarrow.Table``, a path, or a sequence of paths.
        columns: Optional subset of columns to read.

    Raises:
        FileNotFoundError: If a path does not exist.
        ValueError: If a requested column is missing from a source.

    Returns:
        Iterator of ``{column: value}`` dicts in file order.
    """
    if isinstance(source, pa.Table):
        if columns is None:
            return iter(source.to_pylist())
        _check_columns(columns, source.column_names, source="table")
        return iter(source.select(columns).to_pylist())
    if isinstance(source, (str, Path)):
        paths = [str(source)]
    else:
        paths = [str(p) for p in source]
    if not paths:
        raise ValueError("iter_records() requires at least one parquet path")
    missing = [p for p in paths if not Path(p).exists()]
    if missing:
        raise FileNotFoundError(f"Parquet files not found: {missing}")
    return ParquetRecordReader(parquet_paths=paths, columns=columns).iter_records()
