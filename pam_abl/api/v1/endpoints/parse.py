"""
Validation endpoints for pam_abl configuration values.

These let an administrator check a command directive, a module argument
vector or a whole configuration file before deploying it.
"""
import logging
from fastapi import APIRouter, HTTPException, status

from pam_abl.core.exceptions import (
    CommandSyntaxError,
    ConfigFileError,
    ResourceError,
    UnknownOptionError,
)
from pam_abl.models.module_action import action_names
from pam_abl.schemas.abl_config import AblConfig, ConfigTextRequest
from pam_abl.schemas.command import CommandParseRequest, CommandParseResponse
from pam_abl.schemas.module_args import ModuleArgsRequest, ModuleArgsResponse
from pam_abl.services.config_service import ConfigService
from pam_abl.utils.parsers.command_parser import expand_command, split_command

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/command", response_model=CommandParseResponse)
async def parse_command(request: CommandParseRequest):
    """
    Split a bracket command directive into its parts.

    Placeholders (%u, %h, %s) are expanded when user, host or service is given.
    """
    try:
        parts = split_command(request.command)
    except CommandSyntaxError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": type(e).__name__,
                "message": e.message,
                "position": e.position,
            },
        )

    expanded = None
    if request.user is not None or request.host is not None or request.service is not None:
        expanded = expand_command(parts, user=request.user, host=request.host, service=request.service)

    return CommandParseResponse(parts=parts, count=len(parts), expanded=expanded)


@router.post("/module-args", response_model=ModuleArgsResponse)
async def parse_module_args(request: ModuleArgsRequest):
    """
    Parse a PAM module argument vector.

    A config= argument is read through the config service and must point
    into one of the allowed configuration directories.
    """
    service = ConfigService()
    try:
        result = service.parse_module_args(request.args)
    except UnknownOptionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": type(e).__name__, "message": str(e), "option": e.option},
        )
    except ResourceError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": type(e).__name__, "message": str(e), "path": e.path},
        )

    return ModuleArgsResponse(
        actions=action_names(result.actions),
        action_mask=int(result.actions),
        debug=result.debug,
        config_path=result.config_path,
        config=result.config.model_dump() if result.config is not None else None,
    )


@router.post("/config", response_model=AblConfig)
async def parse_config(request: ConfigTextRequest):
    """Parse the content of a pam_abl configuration file."""
    try:
        return ConfigService().parse_config_text(request.content)
    except ConfigFileError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": type(e).__name__, "message": e.message, "line": e.line_number},
        )
