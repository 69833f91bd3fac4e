# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV map exporter.

One row per grid point: grid coordinates followed by the module's output
columns. External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv
import logging

from arnoldweb.domain.dynamical_map import MapResult
from arnoldweb.ports import MapExporter

logger = logging.getLogger(__name__)


class CsvMapExporter(MapExporter):
    """Exports computed maps to CSV."""

    def export(self, result: MapResult, path: str) -> int:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(['i', 'j', *result.columns])

            for point in result.points:
                writer.writerow([
                    point.i,
                    point.j,
                    *(f'{v:.12e}' for v in point.values),
                ])

        if result.nonfinite_count:
            logger.warning(
                "%d of %d points written to %s have non-finite values",
                result.nonfinite_count, len(result.points), path,
            )
        return len(result.points)
