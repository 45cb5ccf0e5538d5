class CGTError(Exception):
    """Base error for the CGT engine and its collaborators."""


class InvalidFinancialYearError(CGTError, ValueError):
    """Financial-year label is not in the YYYY-YY form."""


class ExternalServiceError(CGTError):
    """Transient failure talking to an external service; safe to retry."""
