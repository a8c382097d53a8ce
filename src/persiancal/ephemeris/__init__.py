"""Ephemeris providers (optional).

Thin wrappers around skyfield/jplephem, used only to validate the built-in
equinox model. Install with:
  pip install "persiancal[ephemeris]"
"""

from ..core.errors import EphemerisUnavailableError


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import skyfield  # noqa: F401
    except ImportError as e:
        raise EphemerisUnavailableError('Ephemeris support requires: pip install "persiancal[ephemeris]"') from e
