"""
Scanned code decode results.

Every scan decodes to exactly one of three variants. Anything that is
neither a JSON object nor a recognizable vCard ends up as raw text, so
callers can always branch on `kind` without guarding against errors.
"""

from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True, slots=True)
class JsonScanResult:
    """A JSON object, usually a payload produced by another DropCard."""

    record: dict[str, Any] = field(default_factory=dict)
    kind: Literal["json"] = "json"


@dataclass(frozen=True, slots=True)
class VCardScanResult:
    """Fields recovered from a vCard."""

    record: dict[str, str] = field(default_factory=dict)
    kind: Literal["vcard"] = "vcard"


@dataclass(frozen=True, slots=True)
class RawScanResult:
    """Unrecognized content, kept verbatim."""

    text: str = ""
    kind: Literal["raw"] = "raw"


ParsedScanResult = JsonScanResult | VCardScanResult | RawScanResult
