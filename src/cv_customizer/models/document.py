"""Source document model."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PDF_MIME_TYPE = "application/pdf"


class SourceDocument(BaseModel):
    """An uploaded document passed unmodified to the model as an attachment."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(repr=False)
    filename: str
    mime_type: Literal["application/pdf"] = PDF_MIME_TYPE
    page_count: int = Field(default=1, ge=1)
    has_text: bool = True

    @property
    def size(self) -> int:
        """Size of the document in bytes."""
        return len(self.content)
