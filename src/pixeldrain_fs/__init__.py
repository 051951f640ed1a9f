"""Hierarchical filesystem adapter for pixeldrain object storage."""

from pixeldrain_fs._capabilities import Capability, CapabilitySet, HashType
from pixeldrain_fs._client import ApiClient
from pixeldrain_fs._config import PixeldrainConfig
from pixeldrain_fs._contract import DirEntry, Fs, Object, ObjectInfo, StaticObjectInfo
from pixeldrain_fs._errors import (
    AlreadyExists,
    ApiError,
    AuthenticationRequired,
    BackendUnavailable,
    CantMove,
    CapabilityNotSupported,
    DeadlineExceeded,
    DirExists,
    DirNotFound,
    InvalidPath,
    IsDirectory,
    NotFound,
    ObjectNotFound,
    PartialWrite,
    PixeldrainError,
)
from pixeldrain_fs._fs import PixeldrainFs
from pixeldrain_fs._models import FilesystemNode, ItemMeta, NodeType, StatResult, Usage, UserInfo
from pixeldrain_fs._mutations import MutationTranslator
from pixeldrain_fs._object import Directory, PixeldrainObject
from pixeldrain_fs._options import HTTPOption, OpenOption, RangeOption, SeekOption
from pixeldrain_fs._path import PathPrefix
from pixeldrain_fs._resolver import PathResolver

__version__ = "0.1.0"

__all__ = [
    # Core
    "PixeldrainFs",
    "PixeldrainObject",
    "Directory",
    "PixeldrainConfig",
    # Contract
    "Fs",
    "Object",
    "ObjectInfo",
    "DirEntry",
    "StaticObjectInfo",
    # Layers
    "ApiClient",
    "PathResolver",
    "MutationTranslator",
    "PathPrefix",
    # Models
    "NodeType",
    "FilesystemNode",
    "StatResult",
    "ItemMeta",
    "UserInfo",
    "Usage",
    # Options & capabilities
    "OpenOption",
    "RangeOption",
    "SeekOption",
    "HTTPOption",
    "Capability",
    "CapabilitySet",
    "HashType",
    # Errors
    "PixeldrainError",
    "NotFound",
    "DirNotFound",
    "ObjectNotFound",
    "AlreadyExists",
    "DirExists",
    "IsDirectory",
    "CantMove",
    "InvalidPath",
    "AuthenticationRequired",
    "CapabilityNotSupported",
    "BackendUnavailable",
    "DeadlineExceeded",
    "ApiError",
    "PartialWrite",
    # Version
    "__version__",
]
