"""
Host capabilities consumed by the probes.

Each capability takes an open binary stream and either returns a raw value or
raises ``ProbeUnavailable`` / ``ProbeDecodeFailure``. The defaults wrap
hashlib, Pillow and mutagen; tests and embedders may swap in their own.
"""
from __future__ import annotations

import hashlib
import math
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, Tuple

from mutagen import File as MutagenFile
from PIL import Image, UnidentifiedImageError

from .config import ProbeSettings
from .models import ProbeDecodeFailure, ProbeUnavailable

ImageDimensionsCapability = Callable[[BinaryIO], Tuple[int, int]]
MediaDurationCapability = Callable[[BinaryIO], float]


class HashlibDigest:
    def __init__(self, algorithm: str = "sha256", chunk_size: int = 1 << 20) -> None:
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    @property
    def available(self) -> bool:
        return self.algorithm in hashlib.algorithms_available

    def __call__(self, stream: BinaryIO) -> str:
        if not self.available:
            raise ProbeUnavailable(f"hashlib has no {self.algorithm}")
        hasher = hashlib.new(self.algorithm)
        while True:
            chunk = stream.read(self.chunk_size)
            if not chunk:
                break
            hasher.update(chunk)
        return hasher.hexdigest()


def pillow_image_dimensions(stream: BinaryIO) -> Tuple[int, int]:
    try:
        with Image.open(stream) as img:
            width, height = img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ProbeDecodeFailure(f"not a decodable image: {exc}") from exc
    return int(width), int(height)


def mutagen_media_duration(stream: BinaryIO) -> float:
    try:
        media = MutagenFile(stream)
    except Exception as exc:
        raise ProbeDecodeFailure(f"unreadable media: {exc}") from exc
    # FileType truthiness reflects its tag count, so untagged media is falsy.
    if media is None or getattr(media, "info", None) is None:
        raise ProbeDecodeFailure("unrecognised media container")
    length = getattr(media.info, "length", None)
    if length is None:
        return math.nan
    return float(length)


@dataclass(slots=True)
class Capabilities:
    digest: Optional[Callable[[BinaryIO], str]] = None
    image_dimensions: Optional[ImageDimensionsCapability] = None
    media_duration: Optional[MediaDurationCapability] = None

    @classmethod
    def default(cls, settings: Optional[ProbeSettings] = None) -> "Capabilities":
        settings = settings or ProbeSettings()
        return cls(
            digest=HashlibDigest(settings.digest_algorithm, settings.chunk_size),
            image_dimensions=pillow_image_dimensions,
            media_duration=mutagen_media_duration,
        )
