from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DIGEST_ALGORITHMS = ("sha256", "sha3_256", "blake2s")
PROBE_NAMES = ("digest", "image_dimensions", "media_duration")
CONFIG_NAMES = ("matedump.yaml", "matedump.yml")


class ProbeSettings(BaseModel):
    digest_algorithm: str = "sha256"
    chunk_size: int = Field(default=1 << 20, gt=0)
    disabled: List[str] = Field(default_factory=list)

    @field_validator("digest_algorithm", mode="before")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        name = str(value).strip().lower().replace("-", "_")
        if name not in DIGEST_ALGORITHMS:
            raise ValueError(
                f"digest_algorithm must be one of {', '.join(DIGEST_ALGORITHMS)}"
            )
        return name

    @field_validator("disabled")
    @classmethod
    def _check_disabled(cls, values: List[str]) -> List[str]:
        unknown = [v for v in values if v not in PROBE_NAMES]
        if unknown:
            raise ValueError(f"unknown probe(s): {', '.join(unknown)}")
        return values


class OutputSettings(BaseModel):
    format: Literal["json", "csv"] = "json"


class RunSettings(BaseModel):
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class Settings(BaseModel):
    probes: ProbeSettings = ProbeSettings()
    output: OutputSettings = OutputSettings()
    run: RunSettings = RunSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for name in CONFIG_NAMES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    path = find_config(explicit_path)
    if path is None:
        return Settings()
    return Settings.load(path)
