# msautils/errors.py


class ConservationError(Exception):
    """Base class for every fatal error raised while scoring an alignment."""


class InputError(ConservationError):
    """Alignment input is missing, unreadable or holds no usable records."""


class FormatError(InputError):
    """Alignment text parsed but does not describe a valid alignment."""


class AlphabetError(ConservationError):
    """A symbol was found outside the alphabet derived from the alignment."""


class OutputError(ConservationError):
    """Destination file cannot be opened for writing."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        msg = f"Cannot open file {path} for writing"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DegenerateInputError(ConservationError):
    """A normalization constant is undefined for this input (log(1), log(0), 0-width range)."""
