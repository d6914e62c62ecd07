from pydantic import BaseModel


class ChatError(BaseModel):
    """Standard error response model."""

    message: str
    code: str


INVALID_MESSAGE = "INVALID_MESSAGE"
INVALID_REQUEST = "INVALID_REQUEST"
INTERNAL_ERROR = "INTERNAL_ERROR"
