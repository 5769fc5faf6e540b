from __future__ import annotations

from typing import Dict, Optional

from ..capabilities import Capabilities
from ..meta_keys import HEIGHT, WIDTH
from ..models import BlobInput, ProbeDecodeFailure
from .protocols import Probe


class ImageDimensionsProbe(Probe):
    name = "image_dimensions"

    def applies(self, blob: BlobInput, capabilities: Capabilities) -> bool:
        return capabilities.image_dimensions is not None and blob.has_type_family("image")

    def collect(
        self, blob: BlobInput, capabilities: Capabilities
    ) -> Optional[Dict[str, object]]:
        with blob.open() as stream:
            width, height = capabilities.image_dimensions(stream)
        if width < 0 or height < 0:
            raise ProbeDecodeFailure(f"negative dimensions {width}x{height}")
        return {WIDTH: int(width), HEIGHT: int(height)}
