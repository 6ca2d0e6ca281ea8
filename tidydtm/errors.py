"""
Exceptions raised by the conversion functions.

All of them derive from :class:`ValueError`, so code that catches ``ValueError`` for invalid input keeps working.
"""


class TidyDTMError(ValueError):
    """Base class for all errors raised for invalid input data."""


class SchemaError(TidyDTMError):
    """Input records or matrices are malformed, e.g. missing fields, null labels or non-numeric values."""


class DuplicateKeyError(TidyDTMError):
    """The same (document, term) pair occurs more than once and duplicates are not aggregated."""


class EmptyInputError(TidyDTMError):
    """Input contains no documents or terms although this was explicitly disallowed."""
