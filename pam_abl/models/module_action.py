"""Module action flags and the module-argument keyword table."""
import enum
from types import MappingProxyType
from typing import List, Mapping


class ModuleAction(enum.IntFlag):
    """Checks and logging a module invocation should perform."""
    NONE = 0
    CHECK_USER = 1
    CHECK_HOST = 2
    LOG_USER = 4
    LOG_HOST = 8


# Keyword -> bits it sets. The *_both keywords set two bits at once.
KEYWORD_ACTIONS: Mapping[str, ModuleAction] = MappingProxyType({
    "check_user": ModuleAction.CHECK_USER,
    "check_host": ModuleAction.CHECK_HOST,
    "check_both": ModuleAction.CHECK_USER | ModuleAction.CHECK_HOST,
    "log_user": ModuleAction.LOG_USER,
    "log_host": ModuleAction.LOG_HOST,
    "log_both": ModuleAction.LOG_USER | ModuleAction.LOG_HOST,
})

DEBUG_KEYWORD = "debug"
CONFIG_KEY = "config"


def action_names(actions: ModuleAction) -> List[str]:
    """
    List the single-bit flag names set in a mask, in declaration order.

    Args:
        actions: Action bitmask

    Returns:
        Names such as ["CHECK_USER", "LOG_HOST"]; empty for NONE
    """
    return [
        flag.name
        for flag in (
            ModuleAction.CHECK_USER,
            ModuleAction.CHECK_HOST,
            ModuleAction.LOG_USER,
            ModuleAction.LOG_HOST,
        )
        if actions & flag
    ]
