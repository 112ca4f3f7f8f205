from image_relay.config import ClientSettings, DnsServerAddress, ServerSettings


def test_client_defaults(monkeypatch):
    for name in ("SERVER_NAME", "SERVER_PORT", "DNS_SERVER", "DNS_TIMEOUT_MS", "ON_FETCH_ERROR"):
        monkeypatch.delenv(name, raising=False)

    settings = ClientSettings.from_env()

    assert settings.server_name == "webserver.demo.com"
    assert settings.server_port == 32612
    assert settings.dns_server == DnsServerAddress("192.168.0.199", 53)
    assert settings.dns_timeout_ms == 5000
    assert settings.on_fetch_error == "continue"
    assert settings.base_url == "http://webserver.demo.com:32612"


def test_client_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SERVER_NAME", "images.lan")
    monkeypatch.setenv("SERVER_PORT", "8080")
    monkeypatch.setenv("DNS_SERVER", "10.0.0.53:5353")
    monkeypatch.setenv("ON_FETCH_ERROR", "STOP")

    settings = ClientSettings.from_env()

    assert settings.base_url == "http://images.lan:8080"
    assert settings.dns_server == DnsServerAddress("10.0.0.53", 5353)
    assert settings.on_fetch_error == "stop"


def test_server_defaults(monkeypatch):
    for name in ("IMAGE_DIR", "PORT", "JPEG_QUALITY"):
        monkeypatch.delenv(name, raising=False)

    settings = ServerSettings.from_env()

    assert settings.image_dir == "./images"
    assert settings.port == 3333
    assert settings.jpeg_quality == 75
