"""Engine constants and environment-driven settings.

Everything here is read once at import. The only setting taken from the
environment is the location of the calendar data file, so that an extended
table can be deployed without a new release.
"""

from __future__ import annotations

import os
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent

# Bundled table, overridable with SAMBAT_CALENDAR_FILE
CALENDAR_FILE = Path(os.environ.get("SAMBAT_CALENDAR_FILE") or PACKAGE_DIR / "calendar_data.json")

DECIMAL_PRECISION = 28

# Nepal Standard Time is a fixed offset with no daylight saving
NEPAL_UTC_OFFSET = timedelta(hours=5, minutes=45)

# Known correspondence: 25 July 2025 AD is Shrawan 9, 2082 BS
REFERENCE_AD = date(2025, 7, 25)
REFERENCE_BS = (2082, 4, 9)

# The daily interest tier always uses a 30-day month, never the tabulated length
DAYS_PER_INTEREST_MONTH = 30

CURRENCY_QUANTUM = Decimal("0.01")
