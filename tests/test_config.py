import pytest

from poe_gateway.shared.config import load_config


def test_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("MODEL_MAPPING_FILE", raising=False)

    config = load_config(str(tmp_path / "absent.yml"))

    assert config["server"]["port"] == 8000
    assert config["server"]["host"] == "0.0.0.0"
    assert config["upstream"]["url"] == "https://api.poe.com/v1/chat/completions"
    assert config["mapping"]["path"] == "models.json"
    assert config["requestProxy"]["enabled"] is False


def test_file_values_override_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("MODEL_MAPPING_FILE", raising=False)
    path = tmp_path / "config.yml"
    path.write_text(
        "server:\n  log_level: DEBUG\n"
        "upstream:\n  url: https://upstream.test/v1/chat/completions\n  timeout: 30\n"
        "mapping:\n  path: /etc/gateway/models.json\n",
        encoding="utf-8",
    )

    config = load_config(str(path))

    assert config["server"]["log_level"] == "DEBUG"
    assert config["upstream"]["url"] == "https://upstream.test/v1/chat/completions"
    assert config["upstream"]["timeout"] == 30.0
    assert config["mapping"]["path"] == "/etc/gateway/models.json"


def test_mapping_path_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("MODEL_MAPPING_FILE", "/tmp/other-models.json")

    config = load_config(str(tmp_path / "absent.yml"))

    assert config["mapping"]["path"] == "/tmp/other-models.json"


@pytest.mark.parametrize("content", ["server: [unclosed", "server:\n  port: not-a-port\n", "- just\n- a list\n"])
def test_invalid_config_exits(tmp_path, content):
    path = tmp_path / "config.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        load_config(str(path))

    assert exc_info.value.code == 1
