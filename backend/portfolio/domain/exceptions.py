class PortfolioError(Exception):
    """Base class for errors raised by the portfolio services."""


class DataAccessError(PortfolioError):
    """Query, network or constraint failure in the row store."""


class RecordNotFound(DataAccessError):
    def __init__(self, collection, record_id):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No {collection} record with id '{record_id}'")


class UploadError(PortfolioError):
    """Object storage rejected or failed an upload."""


class ValidationError(PortfolioError):
    """Client-side check failed (missing required fields, bad input)."""

    def __init__(self, message, fields=None):
        self.fields = list(fields or [])
        super().__init__(message)
