"""Schemas for command directive operations."""
from typing import List, Optional
from pydantic import BaseModel


class CommandParseRequest(BaseModel):
    """Request schema for splitting a command directive."""
    command: str
    # If any of these are set, placeholders are expanded in the response
    user: Optional[str] = None
    host: Optional[str] = None
    service: Optional[str] = None


class CommandParseResponse(BaseModel):
    """Response schema for a split command directive."""
    parts: List[str]
    count: int
    expanded: Optional[List[str]] = None
