#!/usr/bin/env python3
# cli.py
# CLI entry point bridging arguments to the control system.
# Author: Daniel Würmli

"""CLI entry point bridging arguments to the control system."""

import sys

from .control.control_system import main as control_main


def main():
    """Run the control-system CLI and exit with its status."""
    sys.exit(control_main())


if __name__ == "__main__":
    main()
