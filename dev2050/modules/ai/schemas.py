# dev2050/modules/ai/schemas.py

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"

class ChatMessage(BaseModel):
    role: ChatRole
    content: str = Field(..., min_length=1)

class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)

    @field_validator("messages")
    def last_message_from_user(cls, value):
        if value[-1].role != ChatRole.USER:
            raise ValueError("The last message must come from the user.")
        return value

class ChatResponse(BaseModel):
    message: ChatMessage

class QuoteResponse(BaseModel):
    quote: str

class AIAnswerRequest(BaseModel):
    query: str = Field(..., min_length=1)

class AIAnswerResponse(BaseModel):
    answer: Optional[str] = None

class JsonGeneratorRequest(BaseModel):
    prompt: str = Field(..., min_length=1)

class JsonGeneratorResponse(BaseModel):
    body: str
