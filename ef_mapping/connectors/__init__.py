"""
ef_mapping/connectors package marker.
"""

from ef_mapping.connectors.base import BaseConnector, ConnectorRequestError
from ef_mapping.connectors.lune_connector import LuneConnector

__all__ = [
    "BaseConnector",
    "ConnectorRequestError",
    "LuneConnector",
]
