from datetime import date, datetime


def _serialize(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def normalize_record(model):
    """
    Flatten an ORM row into a plain record (column name -> value).
    Dates and timestamps become ISO 8601 strings.
    """
    return {
        column.key: _serialize(getattr(model, column.key))
        for column in model.__table__.columns
    }
