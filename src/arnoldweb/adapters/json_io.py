# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON map I/O adapter.

Writes computed maps as a JSON document and reads them back. Non-finite
values are stored as null so the output stays valid JSON.
"""
import json
import math
from typing import Any

from arnoldweb.domain.dynamical_map import MapPoint, MapResult
from arnoldweb.ports import MapExporter


def _encode_value(v: float) -> float | None:
    return v if math.isfinite(v) else None


def _decode_value(v: float | None) -> float:
    return math.nan if v is None else float(v)


class JsonMapExporter(MapExporter):
    """Exports computed maps to JSON files."""

    def export(self, result: MapResult, path: str) -> int:
        doc: dict[str, Any] = {
            'module': result.module,
            'columns': list(result.columns),
            'xres': result.xres,
            'yres': result.yres,
            'points': [
                {
                    'i': p.i,
                    'j': p.j,
                    'values': [_encode_value(v) for v in p.values],
                }
                for p in result.points
            ],
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(doc, f, indent=2, allow_nan=False)
        return len(result.points)


class JsonMapReader:
    """Reads maps written by JsonMapExporter."""

    def read_map(self, path: str) -> MapResult:
        with open(path, encoding='utf-8') as f:
            doc = json.load(f)
        try:
            points = tuple(
                MapPoint(
                    i=int(p['i']),
                    j=int(p['j']),
                    values=tuple(_decode_value(v) for v in p['values']),
                )
                for p in doc['points']
            )
            return MapResult(
                module=doc['module'],
                columns=tuple(doc['columns']),
                xres=int(doc['xres']),
                yres=int(doc['yres']),
                points=points,
            )
        except KeyError as e:
            raise ValueError(f"Map file {path} is missing field {e}") from e
