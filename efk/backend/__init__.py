"""Remote repository gateways."""

from .interface import FileMetadata, FileType, GatewayOutcome, GatewayResult, RemoteAssetGateway
from .api import ApiGateway
from .vocabulary import DEFAULT_FILE_TYPES, load_file_types

__all__ = [
    "ApiGateway",
    "DEFAULT_FILE_TYPES",
    "FileMetadata",
    "FileType",
    "GatewayOutcome",
    "GatewayResult",
    "RemoteAssetGateway",
    "load_file_types",
]
