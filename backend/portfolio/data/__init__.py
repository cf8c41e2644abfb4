from flask import current_app, g

from portfolio.extensions import db
from .client import DataAccessClient, COLLECTIONS
from .storage import ObjectStorage


def get_client() -> DataAccessClient:
    """Request-scoped client bound to the app's session and storage."""
    if "data_client" not in g:
        g.data_client = DataAccessClient(
            db.session,
            current_app.extensions["object_storage"],
        )
    return g.data_client


__all__ = ["DataAccessClient", "ObjectStorage", "COLLECTIONS", "get_client"]
