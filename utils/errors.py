"""
Error types raised by the allocation engine.
"""


class InputError(ValueError):
    """
    Raised when the engine receives malformed input.

    This signals a caller bug (bad dates, negative percentages, a capacity
    outside 0-100) and is kept distinct from validation results, which are
    returned rather than raised.
    """
