"""Exception types raised by the smart irrigation engine."""


class SmartIrrigationError(Exception):
    """Base class for engine errors."""


class DataUnavailable(SmartIrrigationError):
    """The crop/soil dataset source could not be read."""

    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Crop dataset unavailable: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
