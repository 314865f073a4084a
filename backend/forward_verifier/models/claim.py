from enum import Enum
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Verdict(str, Enum):
    TRUE = "True"
    FALSE = "False"
    UNVERIFIED = "Unverified"
    MISLEADING = "Misleading"

    @classmethod
    def coerce(cls, value) -> "Verdict":
        """Map loose model output onto a verdict, defaulting to Unverified"""
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return cls.UNVERIFIED


class Category(str, Enum):
    MEDICAL = "Medical"
    FINANCIAL = "Financial"
    POLITICAL = "Political"
    SCIENCE = "Science"
    OTHER = "Other"

    @classmethod
    def coerce(cls, value) -> "Category":
        """Map loose model output onto a category, defaulting to Other"""
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return cls.OTHER


class PipelineStage(str, Enum):
    IDLE = "idle"
    TRANSCRIBING = "transcribing"
    VERIFYING = "verifying"
    SUMMARIZING = "summarizing"
    DONE = "done"
    FAILED = "failed"


class Citation(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str


class VerificationResult(BaseModel):
    """Structured verdict for one claim. Built fresh per request and never mutated."""
    model_config = ConfigDict(frozen=True)

    verdict: Verdict = Verdict.UNVERIFIED
    confidence: int = Field(0, ge=0, le=100)
    explanation: str
    category: Category = Category.OTHER
    citations: List[Citation] = Field(default_factory=list)
    summary: Optional[str] = None
    extracted_text: Optional[str] = None  # image path only

    def with_summary(self, summary: str) -> "VerificationResult":
        return self.model_copy(update={"summary": summary})

    def with_extracted_text(self, text: str) -> "VerificationResult":
        return self.model_copy(update={"extracted_text": text})

    def share_text(self) -> str:
        """Message suitable for forwarding to the chat the claim came from."""
        return (
            f"🔍 *Fake-Forward Verifier*\n"
            f"Verdict: {self.verdict.value.upper()}\n\n"
            f"{self.summary or ''}\n\n"
            f"Check your facts!"
        )


class TextRequest(BaseModel):
    kind: Literal["text"] = "text"
    content: str

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Claim text must not be empty')
        return v


class ImageRequest(BaseModel):
    kind: Literal["image"] = "image"
    data: bytes
    mime_type: Optional[str] = None


VerificationRequest = Annotated[Union[TextRequest, ImageRequest], Field(discriminator="kind")]


class ClaimInput(BaseModel):
    """Request body for text verification"""
    claim_text: str = Field(..., min_length=1)


class SummaryInput(BaseModel):
    """Request body for a standalone summary"""
    explanation: str
    verdict: str
