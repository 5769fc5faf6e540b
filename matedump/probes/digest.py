from __future__ import annotations

from typing import Dict, Optional

from ..capabilities import Capabilities
from ..meta_keys import CONTENT_DIGEST
from ..models import BlobInput
from .protocols import Probe


class DigestProbe(Probe):
    name = "digest"

    def applies(self, blob: BlobInput, capabilities: Capabilities) -> bool:
        digest = capabilities.digest
        if digest is None:
            return False
        return bool(getattr(digest, "available", True))

    def collect(
        self, blob: BlobInput, capabilities: Capabilities
    ) -> Optional[Dict[str, object]]:
        with blob.open() as stream:
            value = capabilities.digest(stream)
        return {CONTENT_DIGEST: value.lower()}
