from domain.config import BBVAConfig, get_bbva_config, reload_config


def test_defaults(monkeypatch):
    for key in ("BBVA_BASE_URL", "BBVA_CONNECT_TIMEOUT", "BBVA_READ_TIMEOUT", "BBVA_PROXY_URL"):
        monkeypatch.delenv(key, raising=False)
    config = BBVAConfig()
    assert config.base_url == "https://servicios.bbva.es"
    assert config.connect_timeout == 5.0
    assert config.read_timeout == 20.0
    assert config.proxy_url is None

def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("BBVA_READ_TIMEOUT", "3.5")
    monkeypatch.setenv("BBVA_PROXY_URL", "http://localhost:8888")
    config = BBVAConfig()
    assert config.read_timeout == 3.5
    assert config.proxy_url == "http://localhost:8888"

def test_empty_proxy_means_disabled(monkeypatch):
    monkeypatch.setenv("BBVA_PROXY_URL", "")
    assert BBVAConfig().proxy_url is None

def test_reload_config(monkeypatch):
    monkeypatch.setenv("BBVA_BASE_URL", "https://example.test")
    reload_config()
    assert get_bbva_config().base_url == "https://example.test"
    monkeypatch.delenv("BBVA_BASE_URL")
    reload_config()
    assert get_bbva_config().base_url == "https://servicios.bbva.es"
