"""Errors raised by the FSRS engine."""


class FSRSError(Exception):
    """Base class for all engine errors."""


class InvalidConfig(FSRSError, ValueError):
    """Parameters are malformed (e.g. the weight vector is not 17 long)."""


class UnknownState(FSRSError, ValueError):
    """A card or log carries a state outside NEW/LEARNING/REVIEW/RELEARNING."""


class InvalidRating(FSRSError, ValueError):
    """A rating cannot be used for the requested operation."""
