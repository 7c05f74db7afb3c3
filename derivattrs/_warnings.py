"""Custom warning category for derivattrs."""


class DerivattrsWarning(UserWarning):
    """Warning category for derivattrs-specific warnings.

    This can be used to filter derivattrs warnings:
    >>> import warnings
    >>> warnings.filterwarnings("ignore", category=DerivattrsWarning)
    """

    pass
