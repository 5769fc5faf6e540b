"""Blob metadata extraction: identity attributes, content digest and format probes."""

from importlib import metadata as _metadata

from .extractor import MetadataExtractor, extract
from .models import BlobInput, InvalidInput, MetadataRecord, NothingToSerialize
from .serializers import to_csv, to_json

try:
    __version__ = _metadata.version("matedump")
except _metadata.PackageNotFoundError:  # pragma: no cover - source checkout without install
    __version__ = "0.0.0"

__all__ = [
    "BlobInput",
    "InvalidInput",
    "MetadataExtractor",
    "MetadataRecord",
    "NothingToSerialize",
    "__version__",
    "extract",
    "to_csv",
    "to_json",
]
