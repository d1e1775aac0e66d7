"""
app/connectors package marker.
"""

from app.connectors.base import BaseConnector, ConnectorRequestError, PayloadShapeError
from app.connectors.sitenote_connector import SiteNoteConnector, get_sitenote_connector

__all__ = [
    "BaseConnector",
    "ConnectorRequestError",
    "PayloadShapeError",
    "SiteNoteConnector",
    "get_sitenote_connector",
]
