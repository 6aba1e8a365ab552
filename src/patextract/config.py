"""Runtime configuration for extraction workflows."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_BASE_URL = "https://patents.google.com"
DEFAULT_IMAGE_HOST_MARKER = "patentimages"
DEFAULT_POLL_ATTEMPTS = 30
DEFAULT_POLL_DELAY_SECONDS = 0.5
DEFAULT_SETTLE_SECONDS = 1.0


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_non_negative_float(*, name: str, raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if value < 0:
        raise ValueError(f"{name} must be >= 0")
    return value


@dataclass(frozen=True, slots=True)
class ExtractionSettings:
    """Validated settings shared by the extraction workflows and CLIs."""

    base_url: str = DEFAULT_BASE_URL
    image_host_marker: str = DEFAULT_IMAGE_HOST_MARKER
    poll_attempts: int = DEFAULT_POLL_ATTEMPTS
    poll_delay_seconds: float = DEFAULT_POLL_DELAY_SECONDS
    settle_seconds: float = DEFAULT_SETTLE_SECONDS

    @property
    def patent_base_url(self) -> str:
        return f"{self.base_url}/patent/"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExtractionSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        base_url = source.get("PATEXTRACT_BASE_URL", DEFAULT_BASE_URL).strip()
        if not base_url:
            raise ValueError("PATEXTRACT_BASE_URL cannot be empty")
        if not (base_url.startswith("http://") or base_url.startswith("https://")):
            raise ValueError("PATEXTRACT_BASE_URL must start with http:// or https://")

        marker = source.get("PATEXTRACT_IMAGE_HOST_MARKER", DEFAULT_IMAGE_HOST_MARKER).strip()
        if not marker:
            raise ValueError("PATEXTRACT_IMAGE_HOST_MARKER cannot be empty")

        attempts_raw = source.get("PATEXTRACT_POLL_ATTEMPTS", str(DEFAULT_POLL_ATTEMPTS)).strip()
        delay_raw = source.get("PATEXTRACT_POLL_DELAY_SECONDS", str(DEFAULT_POLL_DELAY_SECONDS)).strip()
        settle_raw = source.get("PATEXTRACT_SETTLE_SECONDS", str(DEFAULT_SETTLE_SECONDS)).strip()

        if not attempts_raw:
            raise ValueError("PATEXTRACT_POLL_ATTEMPTS cannot be empty")
        if not delay_raw:
            raise ValueError("PATEXTRACT_POLL_DELAY_SECONDS cannot be empty")
        if not settle_raw:
            raise ValueError("PATEXTRACT_SETTLE_SECONDS cannot be empty")

        return cls(
            base_url=base_url.rstrip("/"),
            image_host_marker=marker,
            poll_attempts=_parse_positive_int(name="PATEXTRACT_POLL_ATTEMPTS", raw_value=attempts_raw),
            poll_delay_seconds=_parse_non_negative_float(
                name="PATEXTRACT_POLL_DELAY_SECONDS",
                raw_value=delay_raw,
            ),
            settle_seconds=_parse_non_negative_float(name="PATEXTRACT_SETTLE_SECONDS", raw_value=settle_raw),
        )
