from __future__ import annotations

import os

from dotenv import load_dotenv


load_dotenv()

APP_TITLE = os.getenv("LOAN_CALCULATOR_TITLE", "Loan Amortization Calculator API")

LOG_LEVEL = os.getenv("LOAN_CALCULATOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

MONTHS_PER_YEAR = 12

# Annual rates are percentages; 100% and above are rejected
MAX_ANNUAL_RATE_PERCENT = 100
