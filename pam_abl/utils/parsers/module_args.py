"""
PAM module argument parser.

Turns the argument vector given to the module in the PAM stack, e.g.

    auth required pam_abl.so check_both log_host debug config=/etc/security/pam_abl.conf

into a ModuleArgs value. Reading the file named by ``config=`` is left to a
resolver callable supplied by the caller.
"""
import logging
from typing import Any, Callable, Optional, Sequence

from pam_abl.core.exceptions import ConfigError, ResourceError, UnknownOptionError
from pam_abl.models.module_action import (
    CONFIG_KEY,
    DEBUG_KEYWORD,
    KEYWORD_ACTIONS,
    ModuleAction,
)
from pam_abl.schemas.module_args import ModuleArgs

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Any]


def resolve_keyword(token: str) -> Optional[ModuleAction]:
    """Look up the action bits for a keyword, or None if it is not one."""
    return KEYWORD_ACTIONS.get(token)


def _resolve_config(path: str, resolver: Optional[Resolver]) -> Any:
    if not path:
        raise ResourceError(path, "empty path")
    if resolver is None:
        return None
    try:
        return resolver(path)
    except ResourceError:
        raise
    except (OSError, ConfigError) as e:
        raise ResourceError(path, str(e)) from e


def parse_module_args(args: Sequence[str], resolver: Optional[Resolver] = None) -> ModuleArgs:
    """
    Parse PAM module arguments.

    Tokens are matched exactly. A repeated ``config=`` is resolved each time
    and the last one wins.

    Args:
        args: Module arguments in order
        resolver: Called with the path of each ``config=`` argument; its
            return value is kept in ModuleArgs.config. OSError and
            ConfigError raised by it are reported as ResourceError.

    Returns:
        ModuleArgs with the combined action mask and debug flag

    Raises:
        UnknownOptionError: If any token is not recognized
        ResourceError: If a ``config=`` target cannot be used
    """
    actions = ModuleAction.NONE
    debug = False
    config_path = None
    config = None

    for token in args:
        bits = resolve_keyword(token)
        if bits is not None:
            actions |= bits
            continue

        if token == DEBUG_KEYWORD:
            debug = True
            continue

        key, sep, value = token.partition("=")
        if sep and key == CONFIG_KEY:
            config = _resolve_config(value, resolver)
            config_path = value
            continue

        logger.warning(f"Unknown module option: {token!r}")
        raise UnknownOptionError(token)

    logger.debug(
        f"Parsed module args: actions={actions!r}, debug={debug}, config_path={config_path}"
    )
    return ModuleArgs(actions=actions, debug=debug, config_path=config_path, config=config)
