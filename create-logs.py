#!/usr/bin/env python3
"""
OSMCHA Changeset Discussion Report
Counts resolved and unresolved changeset discussions for a list of OSM users.
"""

import sys

from osmcha_logs.cli import main


if __name__ == "__main__":
    sys.exit(main())
