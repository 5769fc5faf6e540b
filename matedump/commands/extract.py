from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import Settings
from ..extractor import MetadataExtractor
from ..models import BlobInput, MetadataRecord
from ..serializers import EXPORT_NAMES, serialize

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExtractOutcome:
    record: MetadataRecord
    text: str
    destination: Optional[Path] = None


def resolve_destination(out: Optional[Path], fmt: str) -> Optional[Path]:
    if out is None:
        return None
    if out.is_dir():
        return out / EXPORT_NAMES[fmt]
    return out


def run(
    settings: Settings,
    path: Path,
    *,
    declared_type: Optional[str] = None,
    fmt: Optional[str] = None,
    out: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> ExtractOutcome:
    fmt = fmt or settings.output.format
    if timeout is None:
        timeout = settings.run.timeout_seconds
    blob = BlobInput.from_path(path, declared_type)
    extractor = MetadataExtractor.from_settings(settings)
    record = extractor.extract_sync(blob, timeout=timeout)
    text = serialize(record, fmt)
    destination = resolve_destination(out, fmt)
    if destination is not None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
        logger.info("Wrote %s metadata for %s to %s", fmt.upper(), blob.name, destination)
    return ExtractOutcome(record=record, text=text, destination=destination)
