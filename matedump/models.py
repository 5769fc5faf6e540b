from __future__ import annotations

import io
import math
import mimetypes
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional

from .formatting import format_byte_size, format_timestamp
from .meta_keys import (
    BASE_KEYS,
    CONTENT_DIGEST,
    DURATION_SECONDS,
    EXTRA_KEYS,
    HEIGHT,
    LAST_MODIFIED,
    LAST_MODIFIED_READABLE,
    NAME,
    SIZE_BYTES,
    SIZE_HUMAN,
    TYPE,
    UNDECLARED_TYPE,
    WIDTH,
)


class MatedumpError(Exception):
    """Base class for errors raised by the extraction pipeline."""


class InvalidInput(MatedumpError, ValueError):
    """Raised when no blob is handed to the extractor."""


class ProbeUnavailable(MatedumpError):
    """Raised by a capability that is missing from the environment."""


class ProbeDecodeFailure(MatedumpError):
    """Raised by a capability that could not make sense of the content."""


class NothingToSerialize(MatedumpError, ValueError):
    """Raised when a serializer is called before anything was extracted."""


@dataclass(frozen=True, slots=True)
class BlobInput:
    name: str
    declared_type: str = ""
    size_bytes: int = 0
    last_modified: Optional[float] = None
    content: Optional[bytes] = field(default=None, repr=False)
    path: Optional[Path] = None

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        *,
        name: str,
        declared_type: str = "",
        last_modified: Optional[float] = None,
    ) -> "BlobInput":
        return cls(
            name=name,
            declared_type=declared_type,
            size_bytes=len(data),
            last_modified=last_modified,
            content=bytes(data),
        )

    @classmethod
    def from_path(cls, path: Path, declared_type: Optional[str] = None) -> "BlobInput":
        path = Path(path)
        stat = path.stat()
        if declared_type is None:
            declared_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(
            name=path.name,
            declared_type=declared_type,
            size_bytes=stat.st_size,
            last_modified=stat.st_mtime_ns // 1_000_000,
            path=path,
        )

    def has_type_family(self, *families: str) -> bool:
        declared = self.declared_type or ""
        return any(declared.startswith(f"{family}/") for family in families)

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        if self.content is not None:
            stream = io.BytesIO(self.content)
            # Decoders use the name as a format hint.
            stream.name = self.name
            with stream:
                yield stream
            return
        if self.path is not None:
            with self.path.open("rb") as fh:
                yield fh
            return
        raise ProbeUnavailable(f"{self.name!r} has no readable content")


def _epoch_ms(value: object) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        as_float = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(as_float):
        return None
    return int(as_float)


@dataclass(frozen=True, slots=True)
class BaseAttributes:
    name: str
    type: str
    size_human: str
    size_bytes: int
    last_modified: Optional[int]
    last_modified_readable: str

    @classmethod
    def from_blob(cls, blob: BlobInput) -> "BaseAttributes":
        last_modified = _epoch_ms(blob.last_modified)
        return cls(
            name=blob.name,
            type=blob.declared_type or UNDECLARED_TYPE,
            size_human=format_byte_size(blob.size_bytes),
            size_bytes=blob.size_bytes,
            last_modified=last_modified,
            last_modified_readable=format_timestamp(last_modified),
        )

    def pairs(self) -> tuple[tuple[str, object], ...]:
        values = (
            self.name,
            self.type,
            self.size_human,
            self.size_bytes,
            self.last_modified,
            self.last_modified_readable,
        )
        return tuple(zip(BASE_KEYS, values))


@dataclass(frozen=True, slots=True)
class ExtraAttributes:
    content_digest: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration_seconds: Optional[str] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ExtraAttributes":
        return cls(
            content_digest=values.get(CONTENT_DIGEST),
            width=values.get(WIDTH),
            height=values.get(HEIGHT),
            duration_seconds=values.get(DURATION_SECONDS),
        )

    def pairs(self) -> tuple[tuple[str, object], ...]:
        values = (self.content_digest, self.width, self.height, self.duration_seconds)
        return tuple(
            (key, value) for key, value in zip(EXTRA_KEYS, values) if value is not None
        )


@dataclass(frozen=True, slots=True, eq=False)
class MetadataRecord(Mapping[str, object]):
    """Ordered, read-only view over one extraction's attributes."""

    fields: tuple[tuple[str, object], ...]

    @classmethod
    def build(cls, base: BaseAttributes, extra: ExtraAttributes) -> "MetadataRecord":
        return cls(fields=base.pairs() + extra.pairs())

    def __getitem__(self, key: str) -> object:
        for name, value in self.fields:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def to_dict(self) -> Dict[str, object]:
        return dict(self.fields)
