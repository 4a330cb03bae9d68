"""Data classes for the review pipeline."""

import mimetypes
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .errors import ReadError

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME = "application/pdf"
TEXT_MIME = "text/plain"

# mimetypes does not know .docx on every platform
mimetypes.add_type(DOCX_MIME, ".docx")


@dataclass
class UploadedDocument:
    content: bytes
    mime_type: str
    filename: str
    uploaded_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_path(cls, path, mime_type: str | None = None) -> "UploadedDocument":
        """Load a local file, declaring its MIME type from the extension if not given."""
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ReadError(f"Error reading file: {path.name}") from e
        return cls(content=content, mime_type=mime_type, filename=path.name)


@dataclass
class RiskItem:
    id: str
    type: str              # "high" | "medium" | "low", not enforced
    category: str
    description: str = ""
    explanation: str = ""
    suggestion: str = ""
    location: str | None = None
    original_clause: str | None = None
    suggested_clause: str | None = None
    extra: dict = field(default_factory=dict)  # unknown keys from the model, kept as-is

    def to_dict(self) -> dict:
        d = dict(self.extra)
        d.update({
            "id": self.id,
            "type": self.type,
            "category": self.category,
            "description": self.description,
            "explanation": self.explanation,
            "suggestion": self.suggestion,
            "location": self.location,
        })
        if self.original_clause is not None:
            d["originalClause"] = self.original_clause
        if self.suggested_clause is not None:
            d["suggestedClause"] = self.suggested_clause
        return d


@dataclass
class RevisedSection:
    section: str
    original: str
    revised: str           # changed spans wrapped in **double asterisks**

    def to_dict(self) -> dict:
        return {"section": self.section, "original": self.original, "revised": self.revised}


@dataclass
class AnalysisResult:
    risks: list[RiskItem]
    overall_score: int
    total_clauses: int
    original_text: str
    revised_sections: list[RevisedSection] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape the model emits and the API returns."""
        return {
            "risks": [r.to_dict() for r in self.risks],
            "overallScore": self.overall_score,
            "totalClauses": self.total_clauses,
            "originalText": self.original_text,
            "revisedSections": [s.to_dict() for s in self.revised_sections],
        }
