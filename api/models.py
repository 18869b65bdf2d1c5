# api/models.py
from typing import Any, Optional

from pydantic import BaseModel


# --- Inbound Payload ---
# Presence checks only: whatever the caller sends is forwarded as text.
class ProxyRequest(BaseModel):
    systemPrompt: Any = None
    userQuery: Any = None

    @property
    def user_query(self) -> Optional[str]:
        return str(self.userQuery) if self.userQuery else None

    @property
    def system_prompt(self) -> Optional[str]:
        return str(self.systemPrompt) if self.systemPrompt else None


# --- Outbound Payloads ---
class SummaryResponse(BaseModel):
    summary: str


class ErrorResponse(BaseModel):
    error: str
    details: str


# --- Outcome of one upstream call ---
class GenerationResult(BaseModel):
    summary: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
