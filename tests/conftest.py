"""
Pytest configuration and fixtures.
"""
import os

# Keep test runs from writing log files; must be set before settings load
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from pam_abl.main import app


SAMPLE_ABL_CONFIG = """\
# pam_abl test configuration
db_home = /var/lib/abl
limits = 1000-1200
host_rule = *:10/1h,30/1d
host_purge = 2d
host_whitelist = 127.0.0.1;10.0.0.0/8
host_blk_cmd = [iptables] [-I] [INPUT] [-s] [%h] [-j] [DROP]
user_rule = !root|admin/sshd:3/1m
user_purge = 1h
user_whitelist = root;backup
"""


@pytest.fixture
def sample_config_text():
    """A valid pam_abl configuration file."""
    return SAMPLE_ABL_CONFIG


@pytest.fixture(scope="function")
def client():
    """Create a test client."""
    yield TestClient(app)


@pytest.fixture(scope="function")
def config_dir(tmp_path):
    """
    Directory that config= arguments are allowed to point into.

    Contains a valid pam_abl.conf and a malformed broken.conf.
    """
    (tmp_path / "pam_abl.conf").write_text(SAMPLE_ABL_CONFIG)
    (tmp_path / "broken.conf").write_text("host_rule = *:ten/1h\n")
    with patch("pam_abl.core.config.settings.ALLOWED_CONFIG_DIRS", [str(tmp_path)]):
        yield tmp_path
