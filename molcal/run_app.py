#!/usr/bin/env python
"""Launch the MolCal GUI application.

Usage:
    python -m molcal.run_app [--port PORT] [--storage-dir DIR] [--config FILE]
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description='Launch MolCal GUI')
    parser.add_argument('--port', type=int, default=5006, help='Port to serve on')
    parser.add_argument('--storage-dir', type=str, default=None,
                       help='Directory for the saved compounds file')
    parser.add_argument('--config', type=str, default=None,
                       help='JSON file overriding the default settings')
    parser.add_argument('--no-browser', action='store_true',
                       help='Do not open browser automatically')
    parser.add_argument('--log-level', type=str, default='INFO',
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Logging level')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    from molcal.configs import load_config

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: invalid configuration: {e}")
        sys.exit(1)

    from molcal.app import serve

    storage_dir = args.storage_dir or config.storage_dir
    print(f"Starting MolCal on port {args.port}...")
    print(f"Storage directory: {storage_dir}")

    serve(
        storage_dir=storage_dir,
        config=config,
        port=args.port,
        show=not args.no_browser,
        title="MolCal",
    )


if __name__ == "__main__":
    main()
