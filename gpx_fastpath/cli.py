"""Command-line interface."""

import sys
import os
from .config import ParseConfig
from .exceptions import ConfigurationError, GPXFastpathError
from .logger import logger, set_debug_mode
from .parser import parse_file
from .statistics import calculate_statistics
from .validation import validate_gpx_file


def print_help():
    """Print comprehensive help message."""
    help_text = """
GPX Fastpath
============

Extract latitude, longitude and elevation of GPX trackpoints and print a
summary per file.

USAGE:
    gpx-fastpath <path> [path2 ...] [OPTIONS]

ARGUMENTS:
    <path>               GPX file(s) or directory containing GPX files
                         Directories will be scanned for all .gpx files

OPTIONS:
    --xml                Use the full lxml parser (keeps tracks and segments)
    --fast               Use the fast trackpoint scanner (default)
    --ignore-errors      Skip malformed trackpoints instead of failing
    --debug              Enable debug output to diagnose parsing issues
    --help, -h           Show this help message

ENVIRONMENT:
    GPX_FASTPATH_PARSER         fast | xml
    GPX_FASTPATH_IGNORE_ERRORS  1 | true | yes | on
    GPX_FASTPATH_DEBUG          1 | true | yes | on

EXAMPLES:
    gpx-fastpath ride.gpx
    gpx-fastpath ./rides/ --ignore-errors
    gpx-fastpath --xml --debug problematic.gpx
"""
    print(help_text)


def print_summary(gpx_file, document):
    """Print point count, extent and climbing of a parsed document."""
    stats = calculate_statistics(document)
    print(f"{gpx_file}")
    print(f"  Trackpoints: {stats['total_points']}")
    if stats['skipped_points']:
        print(f"  Skipped:     {stats['skipped_points']}")
    print(f"  Tracks:      {stats['num_tracks']} ({stats['num_segments']} segment(s))")
    print(f"  Distance:    {stats['total_distance_km']:.2f} km")
    print(f"  Ascent:      {stats['total_ascent_m']:.0f} m")
    print(f"  Descent:     {stats['total_descent_m']:.0f} m")
    if 'min_elevation_m' in stats:
        print(f"  Elevation:   {stats['min_elevation_m']:.0f} - {stats['max_elevation_m']:.0f} m")
        print(f"  Latitude:    {stats['min_lat']:.6f} - {stats['max_lat']:.6f}")
        print(f"  Longitude:   {stats['min_lon']:.6f} - {stats['max_lon']:.6f}")


def main():
    """Main CLI entry point."""
    if len(sys.argv) < 2 or '--help' in sys.argv or '-h' in sys.argv:
        print_help()
        sys.exit(0 if '--help' in sys.argv or '-h' in sys.argv else 1)

    try:
        config = ParseConfig.from_env()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    gpx_files = []

    for arg in sys.argv[1:]:
        if arg == '--xml':
            config.use_xml_parser = True
        elif arg == '--fast':
            config.use_xml_parser = False
        elif arg == '--ignore-errors':
            config.ignore_errors = True
        elif arg == '--debug':
            config.debug = True
        elif arg.startswith('--'):
            logger.error(f"Unknown option: {arg}")
            sys.exit(1)
        elif os.path.isdir(arg):
            # Sorted for deterministic output
            dir_gpx_files = [
                os.path.join(arg, filename)
                for filename in sorted(os.listdir(arg))
                if filename.lower().endswith('.gpx')
            ]
            if dir_gpx_files:
                gpx_files.extend(dir_gpx_files)
                logger.info(f"Found {len(dir_gpx_files)} GPX file(s) in directory: {arg}")
            else:
                logger.warning(f"No GPX files found in directory: {arg}")
        elif os.path.isfile(arg):
            gpx_files.append(arg)
        else:
            logger.warning(f"File or directory not found: {arg}")

    if config.debug:
        set_debug_mode(True)

    if not gpx_files:
        print("Error: No GPX files specified or found!")
        sys.exit(1)

    failures = 0
    for gpx_file in gpx_files:
        is_valid, error = validate_gpx_file(gpx_file)
        if not is_valid:
            logger.error(error)
            failures += 1
            continue

        try:
            document = parse_file(
                gpx_file,
                use_xml_parser=config.use_xml_parser,
                ignore_errors=config.ignore_errors,
            )
        except GPXFastpathError as e:
            logger.error(str(e))
            failures += 1
            continue

        print_summary(gpx_file, document)

    if failures:
        sys.exit(1)


if __name__ == '__main__':
    main()
