"""
Tests for the config service (file-backed config= resolution).
"""
import pytest
from unittest.mock import patch

from pam_abl.core.config import settings
from pam_abl.core.exceptions import ResourceError, UnknownOptionError
from pam_abl.models.module_action import ModuleAction
from pam_abl.schemas.abl_config import AblConfig
from pam_abl.services.config_service import ConfigService


def test_valid_module_args_invalid_file():
    """A config= path that cannot be used fails the whole parse."""
    service = ConfigService()
    with pytest.raises(ResourceError):
        service.parse_module_args(
            ["debug", "log_both", "config=/non-existing-dir/foobar_vnfitri5948sj", "log_both"]
        )


def test_path_with_nul_byte_is_resource_error(config_dir):
    service = ConfigService()
    with pytest.raises(ResourceError) as exc_info:
        service.parse_module_args([f"config={config_dir}/a\x00b.conf"])
    assert exc_info.value.reason == "invalid path"


def test_missing_file_inside_allowed_dir(config_dir):
    service = ConfigService()
    with pytest.raises(ResourceError) as exc_info:
        service.parse_module_args([f"config={config_dir / 'missing.conf'}"])
    assert "missing.conf" in exc_info.value.path


def test_unknown_option_wins_over_later_config(config_dir):
    service = ConfigService()
    with pytest.raises(UnknownOptionError):
        service.parse_module_args(["bogus", f"config={config_dir / 'pam_abl.conf'}"])


def test_reads_config_file(config_dir):
    service = ConfigService()
    result = service.parse_module_args(["check_both", "debug", f"config={config_dir / 'pam_abl.conf'}"])
    assert result.actions == ModuleAction.CHECK_USER | ModuleAction.CHECK_HOST
    assert result.debug is True
    assert isinstance(result.config, AblConfig)
    assert result.config.db_home == "/var/lib/abl"


def test_malformed_file_is_resource_error(config_dir):
    service = ConfigService()
    with pytest.raises(ResourceError) as exc_info:
        service.read_config_file(str(config_dir / "broken.conf"))
    assert "Line 1" in exc_info.value.reason


def test_path_outside_allowed_dirs_refused(config_dir, tmp_path_factory):
    other = tmp_path_factory.mktemp("elsewhere") / "pam_abl.conf"
    other.write_text("db_home = /x\n")
    with pytest.raises(ResourceError) as exc_info:
        ConfigService().read_config_file(str(other))
    assert "allowed" in exc_info.value.reason


def test_traversal_out_of_allowed_dir_refused(config_dir):
    with pytest.raises(ResourceError):
        ConfigService().read_config_file(str(config_dir / ".." / "pam_abl.conf"))


def test_oversized_file_refused(config_dir):
    service = ConfigService(max_size=10)
    with pytest.raises(ResourceError) as exc_info:
        service.read_config_file(str(config_dir / "pam_abl.conf"))
    assert "exceeds" in exc_info.value.reason


def test_explicit_allowed_dirs(tmp_path):
    path = tmp_path / "abl.conf"
    path.write_text("user_purge = 10m\n")
    config = ConfigService(allowed_dirs=[str(tmp_path)]).read_config_file(str(path))
    assert config.user_purge == 600


def test_load_default_config(config_dir):
    with patch.object(settings, "DEFAULT_CONFIG_PATH", str(config_dir / "pam_abl.conf")):
        config = ConfigService().load_default_config()
    assert config.host_purge == 172800
