# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for configuration files, map export and process topology.

External dependencies (configparser, csv, json, concurrent.futures, file
I/O) are confined to this layer.
"""
from arnoldweb.adapters.ini_config import IniConfigReader
from arnoldweb.adapters.csv_exporter import CsvMapExporter
from arnoldweb.adapters.json_io import JsonMapExporter, JsonMapReader
from arnoldweb.adapters.concurrent_map import ConcurrentMapRunner

__all__ = [
    "IniConfigReader",
    "CsvMapExporter",
    "JsonMapExporter",
    "JsonMapReader",
    "ConcurrentMapRunner",
]
