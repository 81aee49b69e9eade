"""Business-rule constants of the recalculation engine.

These are fixed rules, not settings. They are candidates for per-company
configuration; until that exists, changing them changes every payroll.
"""

from decimal import Decimal

# Daily overtime threshold: minutes beyond this on a working day are 50% premium.
DAILY_NORMAL_MINUTES = 480

# Rest day (date.weekday()); every minute worked on it is 100% premium.
REST_WEEKDAY = 6  # Sunday

# Monthly divisor used to derive an hourly rate from a base salary, and the
# fixed normal-hours figure reported for monthly employees.
MONTHLY_REFERENCE_HOURS = Decimal("220")

PREMIUM50_MULTIPLIER = Decimal("1.5")
PREMIUM100_MULTIPLIER = Decimal("2.0")
