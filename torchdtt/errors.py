__all__ = ['InvalidArgumentError']


class InvalidArgumentError(ValueError):
    """Raised when a transform or gradient argument violates a precondition.

    All checks run before any transform is executed, so a call that
    raises this error has not produced any partial output.
    """
