"""
Tests for the validation API endpoints.
"""
from fastapi import status


def test_parse_command(client):
    response = client.post(
        "/api/v1/parse/command",
        json={"command": "block: [iptables] [-I] [INPUT] [-s] [%h] [-j] [DROP]"},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["parts"] == ["iptables", "-I", "INPUT", "-s", "%h", "-j", "DROP"]
    assert data["count"] == 7
    assert data["expanded"] is None


def test_parse_command_expands_placeholders(client):
    response = client.post(
        "/api/v1/parse/command",
        json={"command": "[logger] [%u from %h via %s]", "user": "bob", "host": "10.0.0.1", "service": "sshd"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["expanded"] == ["logger", "bob from 10.0.0.1 via sshd"]


def test_parse_command_no_brackets(client):
    response = client.post("/api/v1/parse/command", json={"command": ""})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["count"] == 0


def test_parse_command_syntax_error(client):
    response = client.post("/api/v1/parse/command", json={"command": "[[command] [arg]"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    detail = response.json()["detail"]
    assert detail["error"] == "CommandSyntaxError"
    assert detail["position"] == 1


def test_parse_module_args(client):
    response = client.post(
        "/api/v1/parse/module-args",
        json={"args": ["check_user", "log_host", "debug"]},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["actions"] == ["CHECK_USER", "LOG_HOST"]
    assert data["action_mask"] == 9
    assert data["debug"] is True
    assert data["config"] is None


def test_parse_module_args_unknown_option(client):
    response = client.post(
        "/api/v1/parse/module-args",
        json={"args": ["debug", "log_both", "NON_EXISTING_OPTION", "log_both"]},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    detail = response.json()["detail"]
    assert detail["error"] == "UnknownOptionError"
    assert detail["option"] == "NON_EXISTING_OPTION"


def test_parse_module_args_invalid_file(client):
    response = client.post(
        "/api/v1/parse/module-args",
        json={"args": ["debug", "log_both", "config=/non-existing-dir/foobar_vnfitri5948sj", "log_both"]},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    detail = response.json()["detail"]
    assert detail["error"] == "ResourceError"
    assert detail["path"] == "/non-existing-dir/foobar_vnfitri5948sj"


def test_parse_module_args_with_config_file(client, config_dir):
    path = str(config_dir / "pam_abl.conf")
    response = client.post("/api/v1/parse/module-args", json={"args": ["check_host", f"config={path}"]})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["config_path"] == path
    assert data["config"]["db_home"] == "/var/lib/abl"
    assert data["config"]["host_purge"] == 172800


def test_parse_config(client, sample_config_text):
    response = client.post("/api/v1/parse/config", json={"content": sample_config_text})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["lower_limit"] == 1000
    assert data["host_rule"][0]["limits"] == [{"count": 10, "period": 3600}, {"count": 30, "period": 86400}]


def test_parse_config_error_reports_line(client):
    response = client.post("/api/v1/parse/config", json={"content": "db_home = /x\nnonsense\n"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["line"] == 2


def test_parse_module_args_path_with_nul_byte(client, config_dir):
    response = client.post(
        "/api/v1/parse/module-args",
        json={"args": ["check_user", f"config={config_dir}/a\x00b.conf"]},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["error"] == "ResourceError"
