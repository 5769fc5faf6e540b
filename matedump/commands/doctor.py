from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

import mutagen
import PIL

from ..capabilities import HashlibDigest
from ..config import PROBE_NAMES, Settings


class CheckStatus(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"
    DISABLED = "DISABLED"


@dataclass(frozen=True, slots=True)
class Check:
    label: str
    status: CheckStatus
    detail: Optional[str] = None

    def render(self) -> str:
        suffix = f" ({self.detail})" if self.detail else ""
        return f"{self.label}: {self.status.value}{suffix}"


@dataclass(slots=True)
class DoctorReport:
    results: list[Check] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(check.status is not CheckStatus.ERROR for check in self.results)

    @property
    def checks(self) -> list[str]:
        return [check.render() for check in self.results]

    def add(self, label: str, status: CheckStatus, detail: Optional[str] = None) -> None:
        self.results.append(Check(label, status, detail))


def _probe_check(
    report: DoctorReport, label: str, probe: str, off: set[str], detail: str
) -> None:
    if probe in off:
        report.add(label, CheckStatus.DISABLED)
    else:
        report.add(label, CheckStatus.OK, detail)


def run(settings: Settings, *, config_path: Optional[Path] = None) -> DoctorReport:
    report = DoctorReport()
    off = set(settings.probes.disabled)

    if config_path is not None:
        report.add("Config", CheckStatus.OK, str(config_path))
    else:
        report.add("Config", CheckStatus.OK, "defaults, no matedump.yaml found")

    algorithm = settings.probes.digest_algorithm
    if "digest" not in off and not HashlibDigest(algorithm).available:
        report.add("Digest", CheckStatus.ERROR, f"{algorithm} not provided by hashlib")
    else:
        _probe_check(report, "Digest", "digest", off, algorithm)
    _probe_check(report, "Image decoder", "image_dimensions", off, f"Pillow {PIL.__version__}")
    _probe_check(
        report, "Media prober", "media_duration", off, f"mutagen {mutagen.version_string}"
    )

    if off.issuperset(PROBE_NAMES):
        report.add(
            "Probes",
            CheckStatus.WARNING,
            "all probes disabled; only base attributes will be reported",
        )

    timeout = settings.run.timeout_seconds
    if timeout is None:
        report.add("Timeout", CheckStatus.DISABLED, "extractions are not time-limited")
    else:
        report.add("Timeout", CheckStatus.OK, f"{timeout:g}s")

    return report
