from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable, Dict, Iterable, Optional

from .capabilities import Capabilities
from .config import Settings
from .models import (
    BaseAttributes,
    BlobInput,
    ExtraAttributes,
    InvalidInput,
    MetadataRecord,
    ProbeDecodeFailure,
    ProbeUnavailable,
)
from .probes import Probe, build_probes

logger = logging.getLogger(__name__)


def _settle(future: asyncio.Future, result: Any, error: Optional[BaseException]) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


def _run_detached(name: str, func: Callable[..., Any], *args: Any) -> asyncio.Future:
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _worker() -> None:
        result: Any = None
        error: Optional[BaseException] = None
        try:
            result = func(*args)
        except Exception as exc:
            error = exc
        try:
            loop.call_soon_threadsafe(_settle, future, result, error)
        except RuntimeError:
            # The loop closed while this thread was still working.
            logger.debug("Discarding late result of %s", name)

    threading.Thread(target=_worker, name=f"matedump-{name}", daemon=True).start()
    return future


class MetadataExtractor:
    """
    Runs the applicable probes for one blob and folds their results into a record.

    Each probe runs on its own daemon thread, so an abandoned extraction never
    holds up loop shutdown or interpreter exit. A probe that fails contributes
    nothing; the only error surfaced to callers is ``InvalidInput``. The
    extractor keeps no per-blob state, so one instance may serve any number of
    extractions.
    """

    def __init__(
        self,
        capabilities: Optional[Capabilities] = None,
        probes: Optional[Iterable[Probe]] = None,
    ) -> None:
        self.capabilities = capabilities if capabilities is not None else Capabilities.default()
        self.probes: list[Probe] = list(probes) if probes is not None else build_probes()

    @classmethod
    def from_settings(
        cls, settings: Settings, capabilities: Optional[Capabilities] = None
    ) -> "MetadataExtractor":
        if capabilities is None:
            capabilities = Capabilities.default(settings.probes)
        return cls(capabilities, build_probes(settings.probes.disabled))

    def applicable_probes(self, blob: BlobInput) -> list[Probe]:
        return [probe for probe in self.probes if probe.applies(blob, self.capabilities)]

    async def extract(self, blob: Optional[BlobInput]) -> MetadataRecord:
        if blob is None:
            raise InvalidInput("No blob supplied for extraction")
        base = BaseAttributes.from_blob(blob)
        active = self.applicable_probes(blob)
        logger.debug(
            "Extracting %s (%s): probes=%s",
            blob.name,
            base.type,
            [probe.name for probe in active],
        )
        results = await asyncio.gather(*(self._run_probe(probe, blob) for probe in active))
        values: Dict[str, object] = {}
        for result in results:
            if result:
                values.update(result)
        record = MetadataRecord.build(base, ExtraAttributes.from_mapping(values))
        logger.debug("Extracted %d field(s) for %s", len(record), blob.name)
        return record

    async def _run_probe(self, probe: Probe, blob: BlobInput) -> Optional[Dict[str, object]]:
        try:
            return await _run_detached(probe.name, probe.collect, blob, self.capabilities)
        except ProbeUnavailable as exc:
            logger.debug("Probe %s unavailable for %s: %s", probe.name, blob.name, exc)
        except ProbeDecodeFailure as exc:
            logger.debug("Probe %s could not decode %s: %s", probe.name, blob.name, exc)
        except Exception:
            logger.debug("Probe %s failed for %s", probe.name, blob.name, exc_info=True)
        return None

    def extract_sync(
        self, blob: Optional[BlobInput], *, timeout: Optional[float] = None
    ) -> MetadataRecord:
        async def _bounded() -> MetadataRecord:
            if timeout is None:
                return await self.extract(blob)
            return await asyncio.wait_for(self.extract(blob), timeout)

        return asyncio.run(_bounded())


async def extract(
    blob: Optional[BlobInput], capabilities: Optional[Capabilities] = None
) -> MetadataRecord:
    return await MetadataExtractor(capabilities).extract(blob)
