from dataclasses import dataclass
from enum import Enum


class ContentType(str, Enum):
    PDF = "pdf"
    CSV = "csv"
    TEXT = "text"
    UNSUPPORTED = "unsupported"
    ERROR = "error"


@dataclass(frozen=True)
class ExtractedContent:
    """Normalized text produced from one read of a stored document.

    Extraction never raises: failures come back with content_type ERROR and
    the reason in error.
    """

    text: str
    content_type: ContentType
    is_truncated: bool = False
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.content_type is not ContentType.ERROR
