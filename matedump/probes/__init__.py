from __future__ import annotations

from typing import Iterable

from .digest import DigestProbe
from .image import ImageDimensionsProbe
from .media import MediaDurationProbe
from .protocols import Probe

# Launch order only; record field order is fixed elsewhere.
DEFAULT_PROBES: tuple[type, ...] = (DigestProbe, ImageDimensionsProbe, MediaDurationProbe)


def build_probes(disabled: Iterable[str] = ()) -> list[Probe]:
    skip = set(disabled)
    return [probe_cls() for probe_cls in DEFAULT_PROBES if probe_cls.name not in skip]


__all__ = [
    "DEFAULT_PROBES",
    "DigestProbe",
    "ImageDimensionsProbe",
    "MediaDurationProbe",
    "Probe",
    "build_probes",
]
