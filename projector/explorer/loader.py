"""
Projector Data Set Loader
=========================

Load already-projected points from parquet or CSV.
Zero calculations: just read and structure.

Expected layout, one row per point:
    x, y[, z]        projected coordinates
    <sequence col>   optional; rows sharing a value form one polyline
    <order col>      optional; position along the polyline (else row order)
    anything else    metadata
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence as SequenceType

import polars as pl

from projector.core import DataSet

logger = logging.getLogger(__name__)


class DataSetLoader:
    """Load a projected data set from a table."""

    def __init__(
        self,
        path: Path,
        coordinate_columns: Optional[SequenceType[str]] = None,
        sequence_column: Optional[str] = None,
        order_column: Optional[str] = None,
        sprite_image: Optional[Path] = None,
    ):
        self.path = Path(path)
        self.sequence_column = sequence_column
        self.order_column = order_column
        self.sprite_image = sprite_image

        self.frame = self._load_table()
        self.coordinate_columns = self._resolve_coordinates(coordinate_columns)

        # Validate
        self._validate()

    def _load_table(self) -> pl.DataFrame:
        if not self.path.exists():
            raise FileNotFoundError(f"Data set not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix == '.parquet':
            return pl.read_parquet(self.path)
        if suffix in ('.csv', '.tsv'):
            return pl.read_csv(self.path, separator='\t' if suffix == '.tsv' else ',')
        raise ValueError(f"Unsupported data set format: {self.path.suffix} (expected .parquet, .csv or .tsv)")

    def _resolve_coordinates(self, coordinate_columns) -> List[str]:
        if coordinate_columns is not None:
            return list(coordinate_columns)
        if 'z' in self.frame.columns:
            return ['x', 'y', 'z']
        return ['x', 'y']

    def _validate(self):
        """Validate table structure."""
        if len(self.coordinate_columns) not in (2, 3):
            raise ValueError(
                f"Need 2 or 3 coordinate columns, got {len(self.coordinate_columns)}: "
                f"{self.coordinate_columns}"
            )

        missing = [c for c in self.coordinate_columns if c not in self.frame.columns]
        if missing:
            raise ValueError(
                f"{self.path.name} missing coordinate column(s): {missing}.\n"
                f"Available columns: {self.frame.columns}"
            )

        for col in (self.sequence_column, self.order_column):
            if col is not None and col not in self.frame.columns:
                raise ValueError(f"{self.path.name} missing column '{col}'")

        if self.order_column is not None and self.sequence_column is None:
            raise ValueError("order_column requires sequence_column")

        nulls = self.frame.select(self.coordinate_columns).null_count().row(0)
        if any(nulls):
            raise ValueError(f"{self.path.name} has null coordinates: {dict(zip(self.coordinate_columns, nulls))}")

    @property
    def metadata_columns(self) -> List[str]:
        skip = set(self.coordinate_columns)
        return [c for c in self.frame.columns if c not in skip]

    def _build_sequences(self) -> List[List[int]]:
        if self.sequence_column is None:
            return []

        indexed = self.frame.with_row_index('__row__').filter(pl.col(self.sequence_column).is_not_null())
        sort_cols = [self.sequence_column]
        if self.order_column is not None:
            sort_cols.append(self.order_column)
        sort_cols.append('__row__')

        grouped = (
            indexed.sort(sort_cols)
            .group_by(self.sequence_column, maintain_order=True)
            .agg(pl.col('__row__'))
        )
        return [list(rows) for rows in grouped['__row__'].to_list()]

    def load(self) -> DataSet:
        """Load the complete data set."""
        coords = self.frame.select(self.coordinate_columns).cast(pl.Float64).to_numpy()
        metadata = self.frame.select(self.metadata_columns).to_dicts() if self.metadata_columns else None
        sequences = self._build_sequences()

        data_set = DataSet.from_arrays(
            coords,
            metadata=metadata,
            sequences=sequences,
            dimensions=len(self.coordinate_columns),
            sprite_image=self.sprite_image,
        )
        logger.info(
            f"Loaded {len(data_set.points)} points ({data_set.dimensions}D), "
            f"{len(data_set.sequences)} sequences from {self.path}"
        )
        return data_set
