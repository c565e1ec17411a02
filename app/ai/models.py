from dataclasses import dataclass, field

UNKNOWN_CATEGORY = "Unknown"
FAILED_CATEGORY = "Error: Processing Failed"


@dataclass
class ClassificationResult:
    """Output of the classification call.

    error is set when the call itself failed; primary_category then carries
    FAILED_CATEGORY. A response that could not be parsed is not an error: it
    yields UNKNOWN_CATEGORY with the reason in processing_notes.
    """

    primary_category: str = ""
    category_confidences: dict[str, float] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    processing_notes: str = ""
    processing_seconds: float = 0.0
    error: str | None = None


@dataclass
class SummaryResult:
    """Output of the summarization call."""

    summary: str = ""
    language: str = ""
    key_points: list[str] = field(default_factory=list)
    processing_seconds: float = 0.0
    error: str | None = None
