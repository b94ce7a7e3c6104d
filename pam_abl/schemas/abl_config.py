"""
Pydantic models for a parsed pam_abl configuration file.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class RuleSubject(BaseModel):
    """One name in a rule clause, e.g. ``root`` or ``admin/sshd``."""
    name: str  # "*" matches every name
    service: Optional[str] = None


class RuleLimit(BaseModel):
    """Trigger condition: more than ``count`` failures within ``period`` seconds."""
    count: int
    period: int


class RuleClause(BaseModel):
    """A ``names:limits`` clause of a host or user rule."""
    negated: bool = False
    subjects: List[RuleSubject]
    limits: List[RuleLimit]


class AblConfig(BaseModel):
    """Settings read from a pam_abl configuration file."""
    debug: bool = False
    db_home: Optional[str] = None
    db_module: Optional[str] = None

    # limits = lower-upper; 0 means unbounded
    lower_limit: int = 0
    upper_limit: int = 0

    host_rule: List[RuleClause] = Field(default_factory=list)
    host_purge: Optional[int] = None  # seconds
    host_whitelist: List[str] = Field(default_factory=list)
    host_blk_cmd: List[str] = Field(default_factory=list)
    host_clr_cmd: List[str] = Field(default_factory=list)

    user_rule: List[RuleClause] = Field(default_factory=list)
    user_purge: Optional[int] = None
    user_whitelist: List[str] = Field(default_factory=list)
    user_blk_cmd: List[str] = Field(default_factory=list)
    user_clr_cmd: List[str] = Field(default_factory=list)


class ConfigTextRequest(BaseModel):
    """Request schema for configuration file validation."""
    content: str
