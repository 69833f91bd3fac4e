# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for dynamical map computation.

Usage:
    # Arnold web MEGNO map with built-in defaults
    arnoldweb --export-csv web.csv

    # Options from a configuration file, overridden on the command line
    arnoldweb -c arnold.ini --driver saba3 --tend 20000 --export-json web.json

    # Reproducible run on 8 worker processes
    arnoldweb -c arnold.ini --seed 42 --workers 8 --export-csv web.csv

    # Mandelbrot escape counts (cheap smoke test of the grid runner)
    arnoldweb --module mandelbrot --xres 64 --yres 64 --export-csv mandel.csv

    # Grid and worker layout only
    arnoldweb --module hello --workers 4 --export-csv hello.csv
"""
import argparse
import logging
import sys

import numpy as np

from arnoldweb.adapters.concurrent_map import ConcurrentMapRunner
from arnoldweb.adapters.csv_exporter import CsvMapExporter
from arnoldweb.adapters.ini_config import IniConfigReader
from arnoldweb.adapters.json_io import JsonMapExporter
from arnoldweb.domain.config import ArnoldConfig
from arnoldweb.domain.dynamical_map import ArnoldWebModule, MapResult
from arnoldweb.domain.hello import HelloModule
from arnoldweb.domain.mandelbrot import MandelbrotModule

MODULES = ("arnoldweb", "mandelbrot", "hello")


def build_module(name: str, config: ArnoldConfig):
    """Map module for a module name, configured from config."""
    if name == "arnoldweb":
        return ArnoldWebModule(config)
    if name == "mandelbrot":
        return MandelbrotModule(xres=config.xres, yres=config.yres)
    if name == "hello":
        return HelloModule(xres=config.xres, yres=config.yres)
    raise ValueError(f"Unknown module: {name!r}. Choose from {', '.join(MODULES)}.")


def run(
    config: ArnoldConfig,
    module_name: str = "arnoldweb",
    workers: int | None = None,
) -> MapResult:
    """
    Compute a map for a validated configuration.

    Args:
        config: Run configuration.
        module_name: 'arnoldweb', 'mandelbrot' or 'hello'.
        workers: Worker processes (None: one per CPU).

    Returns:
        MapResult in row-major order.
    """
    module = build_module(module_name, config)
    runner = ConcurrentMapRunner(max_workers=workers)
    return runner.run(module, seed=config.seed)


def _summarize(result: MapResult) -> str:
    lines = [f"Computed {result.module} map {result.xres}x{result.yres} "
             f"({len(result.points)} points)."]
    if result.module == "arnoldweb" and result.points:
        grid = result.as_array()
        megno = grid[:, :, 2]
        finite = megno[np.isfinite(megno)]
        if finite.size:
            lines.append(
                f"MEGNO: min {finite.min():.4f}, max {finite.max():.4f}, "
                f"mean {finite.mean():.4f}"
            )
        lines.append(f"Max energy error: {grid[:, :, 3].max():.3e}")
    if result.nonfinite_count:
        lines.append(f"Warning: {result.nonfinite_count} non-finite points.")
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Compute dynamical maps of the Arnold web (MEGNO chaos indicator)"
    )
    parser.add_argument(
        '--config', '-c',
        help="Path to INI configuration file with an [arnold] section"
    )
    parser.add_argument(
        '--module', '-m', choices=MODULES, default='arnoldweb',
        help="Map module to compute (default: arnoldweb)"
    )
    parser.add_argument(
        '--workers', '-w', type=int,
        help="Number of worker processes (default: one per CPU)"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log progress to stderr"
    )

    options = parser.add_argument_group('integration options (override config file)')
    options.add_argument('--driver', help="Integrator: leapfrog, saba3, 1 or 2")
    options.add_argument('--step', type=float, help="Step (scaled by (√5-1)/2)")
    options.add_argument('--tend', type=float, help="End time of each integration")
    options.add_argument('--eps', type=float, help="Coupling strength")
    options.add_argument('--smod', type=int, help="Energy error sampling stride (steps)")
    options.add_argument('--xmin', type=float, help="Lower bound of I1")
    options.add_argument('--xmax', type=float, help="Upper bound of I1")
    options.add_argument('--ymin', type=float, help="Lower bound of I2")
    options.add_argument('--ymax', type=float, help="Upper bound of I2")
    options.add_argument('--xres', type=int, help="Grid points along I1")
    options.add_argument('--yres', type=int, help="Grid points along I2")
    options.add_argument('--seed', type=int, help="Root seed for reproducible maps")

    export_group = parser.add_argument_group('export')
    export_group.add_argument('--export-csv', help="Export map to CSV")
    export_group.add_argument('--export-json', help="Export map to JSON")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        if args.config:
            config = IniConfigReader().read_config(args.config)
        else:
            config = ArnoldConfig()
        config = config.with_overrides(
            driver=args.driver,
            step=args.step,
            tend=args.tend,
            eps=args.eps,
            smod=args.smod,
            xmin=args.xmin,
            xmax=args.xmax,
            ymin=args.ymin,
            ymax=args.ymax,
            xres=args.xres,
            yres=args.yres,
            seed=args.seed,
        ).validate()

        result = run(config, module_name=args.module, workers=args.workers)
        print(_summarize(result))

        if args.export_csv:
            n = CsvMapExporter().export(result, args.export_csv)
            print(f"Exported {n} points to {args.export_csv}")

        if args.export_json:
            n = JsonMapExporter().export(result, args.export_json)
            print(f"Exported {n} points to {args.export_json}")

    except FileNotFoundError as e:
        print(
            f"Error: File not found: {e.filename}",
            file=sys.stderr,
        )
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
