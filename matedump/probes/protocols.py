from __future__ import annotations

from typing import Dict, Optional, Protocol

from ..capabilities import Capabilities
from ..models import BlobInput


class Probe(Protocol):
    name: str

    def applies(self, blob: BlobInput, capabilities: Capabilities) -> bool: ...

    def collect(
        self, blob: BlobInput, capabilities: Capabilities
    ) -> Optional[Dict[str, object]]: ...
