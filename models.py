from typing import List
from pydantic import BaseModel, Field

import config

class CodeResponse(BaseModel):
    """An ID together with its obfuscated code."""
    id: int
    code: str

class IdResponse(BaseModel):
    """A submitted code together with the ID it decodes to."""
    code: str
    id: int

class BatchEncodePayload(BaseModel):
    """Request model for encoding several IDs at once."""
    ids: List[int] = Field(..., min_length=1, max_length=config.MAX_BATCH_SIZE)

class BatchEncodeResponse(BaseModel):
    codes: List[CodeResponse]

class HealthResponse(BaseModel):
    status: str
    code_length: int

class ErrorResponse(BaseModel):
    error: str
