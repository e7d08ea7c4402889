# -*- coding: utf-8 -*-


class Rejection(Exception):
    """Exception carrying an arbitrary rejection value.

    A Promise can be rejected with any value, but only exceptions can be
    raised. Raising `Rejection(value)` from an executor or a callback rejects
    the Promise with `value` itself, not with the exception.

    Attributes:
        value: the rejection value.
    """

    def __init__(self, value):
        Exception.__init__(self, value)
        self.value = value

    def __str__(self):
        return repr(self.value)


class DrainLimitError(Exception):
    """A queue has executed too many callbacks in a single drain."""
    pass


def rejection_value(error):
    """Returns the value a Promise must be rejected with, for a caught error.
    """
    if isinstance(error, Rejection):
        return error.value
    return error
