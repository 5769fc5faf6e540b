from __future__ import annotations

import logging
import math
from typing import Dict, Optional

from ..capabilities import Capabilities
from ..formatting import to_fixed
from ..meta_keys import DURATION_SECONDS
from ..models import BlobInput
from .protocols import Probe

logger = logging.getLogger(__name__)


class MediaDurationProbe(Probe):
    name = "media_duration"

    def applies(self, blob: BlobInput, capabilities: Capabilities) -> bool:
        return capabilities.media_duration is not None and blob.has_type_family(
            "audio", "video"
        )

    def collect(
        self, blob: BlobInput, capabilities: Capabilities
    ) -> Optional[Dict[str, object]]:
        with blob.open() as stream:
            duration = capabilities.media_duration(stream)
        if duration is None or not math.isfinite(duration):
            # Streams and some containers do not declare a length.
            logger.debug("Duration of %s is unknown (%r)", blob.name, duration)
            return None
        return {DURATION_SECONDS: to_fixed(float(duration), 2)}
