from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class LogStatus(BaseModel):
    category: str
    path: Optional[str] = None
    fallback: bool = False
    pending: int = 0
    written: int = 0
    dropped: int = 0
    failed: int = 0
    closed: bool = False
    relay_alive: bool = True
    model_config = ConfigDict(extra="forbid")

class HealthResp(BaseModel):
    ok: bool
    logs: List[LogStatus] = Field(default_factory=list)
