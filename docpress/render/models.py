from pydantic import BaseModel, Field


class HeadingEntry(BaseModel):
    """One heading in a rendered document's outline."""

    level: int = Field(ge=1, le=6)
    text: str
    id: str
