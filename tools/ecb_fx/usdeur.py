#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Methodology: Clean Architecture – command-line entry point

USD→EUR conversion on historical dates from the ECB daily reference feed:
- fetch: download the ECB CSV export to rates/usdeur.csv
- load: parse the CSV (metadata lines and "-" placeholders skipped) into the SQLite store
- rate / convert: look up the rate for a date, falling back to the previous published day
"""
from __future__ import annotations

from tools.ecb_fx.interface.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
