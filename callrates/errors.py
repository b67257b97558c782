"""Error hierarchy shared by the services, repos and routers.

Routers map ``ValidationError`` to 400 and ``StoreError`` to 500.
"""


class CallRatesError(Exception):
    """Base exception for all call-rates errors."""

    pass


class ValidationError(CallRatesError):
    """Malformed input: bad address, missing field, non-positive price, day out of range."""

    pass


class FormatError(ValidationError):
    """A time string that is not two colon-separated integers."""

    pass


class StoreError(CallRatesError):
    """The underlying database failed (I/O, constraint, schema mismatch).

    Never retried here. Whatever the call was doing is abandoned as a whole.
    """

    pass
