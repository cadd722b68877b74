# wiring_paths/errors.py

"""Recoverable errors raised while building or querying a schematic."""


class SchematicError(Exception):
    """Base class for schematic input and lookup errors."""


class ParseError(SchematicError):
    """Raised when a schematic line cannot be parsed.

    Args:
        line_number (int): 1-based number of the offending line.
        line (str): The raw line text.
        reason (str): Short description of what is wrong.
    """

    def __init__(self, line_number: int, line: str, reason: str = "missing ':' separator"):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: {line!r}")


class UnknownDeviceError(SchematicError, KeyError):
    """Raised when a queried device label does not exist in the schematic."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(label)

    def __str__(self) -> str:
        return f"Unknown device: {self.label!r}"
