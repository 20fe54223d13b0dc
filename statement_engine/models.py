# models.py
# ------------------------------------------------------------------
# Domain models for uploaded statements and processing outcomes.
#
# The wire/session format uses camelCase for file metadata and the
# endpoint's own snake_case keys for results; to_dict()/from_dict()
# are the only places that know about those spellings.
# ------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

MetricValue = Union[int, float, str, None]


@dataclass(frozen=True)
class FinancialMetric:
    """One extracted metric: a value plus the optional period it covers."""

    value: MetricValue = None
    period_from: Optional[str] = None
    period_to: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "FinancialMetric":
        """Build from the endpoint's ``{value, from?, to?}`` shape.

        Anything that is not a dict is treated as a bare value, since the
        extraction model occasionally returns ``"Revenue": 1000``.
        """
        if isinstance(raw, dict):
            return cls(
                value=raw.get("value"),
                period_from=raw.get("from") or None,
                period_to=raw.get("to") or None,
            )
        return cls(value=raw)

    @property
    def has_value(self) -> bool:
        return self.value is not None

    @property
    def period(self) -> Optional[str]:
        if self.period_from and self.period_to:
            return f"{self.period_from} to {self.period_to}"
        return None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"value": self.value}
        if self.period_from:
            d["from"] = self.period_from
        if self.period_to:
            d["to"] = self.period_to
        return d


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of sending one document to the processing endpoint."""

    success: bool
    ocr_text: str = ""
    parsing_results: str = ""
    financial_analysis: str = ""
    financial_data: Optional[Dict[str, FinancialMetric]] = None
    files: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ProcessingResult":
        raw_data = payload.get("financial_data")
        financial_data = None
        if isinstance(raw_data, dict):
            financial_data = {
                str(k): FinancialMetric.from_raw(v) for k, v in raw_data.items()
            }
        files = payload.get("files") or {}
        success = bool(payload.get("success", False))
        error = payload.get("error") or None
        if not success and error is None:
            error = "Processing failed"
        return cls(
            success=success,
            ocr_text=str(payload.get("ocr_text") or ""),
            parsing_results=str(payload.get("parsing_results") or ""),
            financial_analysis=str(payload.get("financial_analysis") or ""),
            financial_data=financial_data,
            files={str(k): str(v) for k, v in files.items()} if isinstance(files, dict) else {},
            error=error,
        )

    @classmethod
    def failure(cls, message: str) -> "ProcessingResult":
        return cls(
            success=False,
            files={"ocr": "", "parsing": "", "analysis": ""},
            error=message,
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "success": self.success,
            "ocr_text": self.ocr_text,
            "parsing_results": self.parsing_results,
            "financial_analysis": self.financial_analysis,
            "files": dict(self.files),
        }
        if self.financial_data is not None:
            d["financial_data"] = {k: m.to_dict() for k, m in self.financial_data.items()}
        if self.error:
            d["error"] = self.error
        return d


@dataclass
class CategoryFile:
    """A statement image collected for one category.

    Mutated in place as processing progresses; the binary payload never
    leaves process memory.
    """

    id: str
    category: str
    file_name: str
    content_type: str
    data: bytes = field(repr=False)
    preview: str = ""
    progress: float = 0.0
    processed: bool = False
    remote_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)

    def metadata(self) -> "FileMetadata":
        return FileMetadata(
            id=self.id,
            category=self.category,
            original_file_name=self.file_name,
            file_type=self.content_type,
            file_size=self.size,
        )


@dataclass(frozen=True)
class FileMetadata:
    """JSON-safe projection of a CategoryFile kept in session storage."""

    id: str
    category: str
    original_file_name: str
    file_type: str
    file_size: int

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FileMetadata":
        return cls(
            id=str(d.get("id", "")),
            category=str(d.get("category", "")),
            original_file_name=str(d.get("originalFileName", "")),
            file_type=str(d.get("fileType", "")),
            file_size=int(d.get("fileSize", 0) or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "originalFileName": self.original_file_name,
            "fileType": self.file_type,
            "fileSize": self.file_size,
        }
