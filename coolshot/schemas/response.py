from pydantic import BaseModel
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """
    Payload of the /health endpoint.
    """
    status: str
    bot: str
    version: str
    uptime: float
    timestamp: str
