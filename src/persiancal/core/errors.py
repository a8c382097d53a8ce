class PersianCalError(Exception):
    """Base error."""

class YearOutOfRangeError(PersianCalError, ValueError):
    """Raised when a year (or an instant's year) lies outside a strategy's supported range."""

    def __init__(self, year: int, min_year: int, max_year: int, key: str = ""):
        self.year = year
        self.min_year = min_year
        self.max_year = max_year
        self.key = key
        where = f" for strategy '{key}'" if key else ""
        super().__init__(f"Year {year} is outside the supported range [{min_year}, {max_year}]{where}")

class IllegalFieldValueError(PersianCalError, ValueError):
    """Raised when a month, day or time-of-day field is out of bounds."""

    def __init__(self, field: str, value: int, lower: int, upper: int):
        self.field = field
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(f"Value {value} for {field} must be in the range [{lower},{upper}]")

class UnknownStrategyError(PersianCalError, KeyError):
    """Raised for an unknown strategy key or alias."""

class EphemerisUnavailableError(PersianCalError, RuntimeError):
    """Raised when the optional ephemeris extras (skyfield/jplephem) are not installed."""
