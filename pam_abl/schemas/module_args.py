"""Schemas for parsed module arguments."""
from typing import Any, List, Optional
from pydantic import BaseModel

from pam_abl.models.module_action import ModuleAction, action_names


class ModuleArgs(BaseModel):
    """Result of parsing the PAM module argument vector."""
    actions: ModuleAction = ModuleAction.NONE
    debug: bool = False
    config_path: Optional[str] = None
    config: Optional[Any] = None  # whatever the config= resolver returned

    model_config = {"frozen": True}

    @property
    def action_names(self) -> List[str]:
        return action_names(self.actions)


class ModuleArgsRequest(BaseModel):
    """Request schema for module argument validation."""
    args: List[str]


class ModuleArgsResponse(BaseModel):
    """Response schema for module argument validation."""
    actions: List[str]
    action_mask: int
    debug: bool
    config_path: Optional[str] = None
    config: Optional[Any] = None
