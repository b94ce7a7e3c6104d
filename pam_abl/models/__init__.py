"""Domain models."""
from pam_abl.models.module_action import ModuleAction, KEYWORD_ACTIONS, action_names

__all__ = [
    "ModuleAction",
    "KEYWORD_ACTIONS",
    "action_names",
]
