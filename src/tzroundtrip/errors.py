"""
Exceptions raised by tzroundtrip.  Storage failures are *not* wrapped:
whatever SQLAlchemy raises reaches the caller untouched.
"""


class DateTimeParseError(ValueError):
    """A date-time literal could not be parsed."""

    def __init__(self, text: str, kind: str, reason: str = ""):
        self.text = text
        self.kind = kind
        msg = f"cannot parse {text!r} as {kind}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class UnknownZoneError(ValueError):
    """Zone identifier is not in the IANA database."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown time zone {name!r}")


class RecordAlreadyStoredError(RuntimeError):
    """Identity is assigned once; a stored record cannot be stored again."""
