from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class EntryCreateRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Free text to store.")


class EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    created_at: datetime
