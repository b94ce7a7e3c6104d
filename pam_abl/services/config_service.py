"""
Service for loading pam_abl configuration.

This is where the file system is touched: the parsers in
pam_abl.utils.parsers only ever see strings.
"""
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from pam_abl.core.config import settings
from pam_abl.core.exceptions import ConfigFileError, ResourceError
from pam_abl.schemas.abl_config import AblConfig
from pam_abl.schemas.module_args import ModuleArgs
from pam_abl.utils.parsers.config_file_parser import AblConfigParser
from pam_abl.utils.parsers.module_args import parse_module_args

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for configuration file processing."""

    def __init__(self, allowed_dirs: Optional[Sequence[str]] = None, max_size: Optional[int] = None):
        """
        Initialize config service.

        Args:
            allowed_dirs: Directories config files may live in (defaults to settings)
            max_size: Max config file size in bytes (defaults to settings)
        """
        dirs = settings.ALLOWED_CONFIG_DIRS if allowed_dirs is None else allowed_dirs
        self.allowed_dirs: List[Path] = [Path(d).resolve() for d in dirs]
        self.max_size = settings.MAX_CONFIG_SIZE if max_size is None else max_size

    def _is_allowed(self, path: Path) -> bool:
        if not self.allowed_dirs:
            return True
        return any(path == d or d in path.parents for d in self.allowed_dirs)

    def parse_config_text(self, content: str) -> AblConfig:
        """Parse configuration file content."""
        return AblConfigParser(content).parse()

    def read_config_file(self, path: str) -> AblConfig:
        """
        Read and parse a configuration file.

        Args:
            path: Path given in a config= module argument

        Returns:
            Parsed AblConfig

        Raises:
            ResourceError: If the file is outside the allowed directories,
                missing, unreadable, too large or malformed
        """
        try:
            file_path = Path(path).resolve()
            if not self._is_allowed(file_path):
                logger.warning(f"Refusing configuration file outside allowed directories: {path}")
                raise ResourceError(path, "not inside an allowed configuration directory")
            size = file_path.stat().st_size
            if size > self.max_size:
                raise ResourceError(path, f"file size {size} exceeds maximum of {self.max_size} bytes")
            content = file_path.read_text(encoding="utf-8")
        except ResourceError:
            raise
        except OSError as e:
            logger.error(f"Failed to read configuration file {path}: {e}")
            raise ResourceError(path, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise ResourceError(path, "file is not valid UTF-8") from e
        except ValueError as e:
            # e.g. embedded NUL byte
            logger.warning(f"Invalid configuration file path {path!r}: {e}")
            raise ResourceError(path, "invalid path") from e

        try:
            config = self.parse_config_text(content)
        except ConfigFileError as e:
            logger.error(f"Malformed configuration file {path}: {e}")
            raise ResourceError(path, str(e)) from e

        logger.info(f"Loaded configuration file {path}")
        return config

    def parse_module_args(self, args: Sequence[str]) -> ModuleArgs:
        """Parse module arguments, reading any config= file through this service."""
        return parse_module_args(args, resolver=self.read_config_file)

    def load_default_config(self) -> AblConfig:
        """Read the configuration file used when no config= argument is given."""
        return self.read_config_file(settings.DEFAULT_CONFIG_PATH)
