"""test suite for settings and proxy discovery."""
import pytest

from stencil import config
from stencil.config import ProxySettings, get_setting, load_system_proxy, set_setting
from stencil.sources.catalog import default_transport

PROXY_KEYS = ["HTTP_PROXY_HOST", "HTTP_PROXY_PORT", "HTTPS_PROXY_HOST", "HTTPS_PROXY_PORT"]


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """point the config file at a temporary location and clear proxy env vars."""
    path = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_FILE", path)
    for key in PROXY_KEYS + [config.REPOSITORY_KEY]:
        monkeypatch.delenv(key, raising=False)
    return path


class TestSettings:
    def test_missing_setting(self, config_file):
        assert get_setting("NOT_THERE") is None

    def test_set_and_get(self, config_file):
        set_setting("STENCIL_REPOSITORY", "someone/templates")
        assert get_setting("STENCIL_REPOSITORY") == "someone/templates"

    def test_set_preserves_other_values(self, config_file):
        set_setting("A", "1")
        set_setting("B", "2")
        set_setting("A", "3")
        assert config_file.read_text() == "A=3\nB=2\n"

    def test_environment_wins(self, config_file, monkeypatch):
        set_setting("HTTPS_PROXY_HOST", "from-file")
        monkeypatch.setenv("HTTPS_PROXY_HOST", "from-env")
        assert get_setting("HTTPS_PROXY_HOST") == "from-env"

    def test_default_repository(self, config_file):
        assert config.get_repository() == config.DEFAULT_REPOSITORY


class TestLoadSystemProxy:
    def test_no_host_means_no_proxy(self, config_file):
        assert load_system_proxy(True, environ={}) is None
        assert load_system_proxy(False, environ={"HTTP_PROXY_PORT": "3128"}) is None

    def test_secure_default_port(self, config_file):
        proxy = load_system_proxy(True, environ={"HTTPS_PROXY_HOST": "proxy.local"})
        assert proxy == ProxySettings("proxy.local", 443, True)

    def test_plain_default_port(self, config_file):
        proxy = load_system_proxy(False, environ={"HTTP_PROXY_HOST": "proxy.local"})
        assert proxy == ProxySettings("proxy.local", 80, False)

    def test_explicit_port(self, config_file):
        proxy = load_system_proxy(True, environ={"HTTPS_PROXY_HOST": "proxy.local", "HTTPS_PROXY_PORT": "8443"})
        assert proxy.port == 8443
        assert proxy.url == "http://proxy.local:8443"

    def test_settings_are_independent(self, config_file):
        environ = {"HTTP_PROXY_HOST": "plain.local", "HTTP_PROXY_PORT": "3128"}
        assert load_system_proxy(True, environ=environ) is None
        assert load_system_proxy(False, environ=environ).port == 3128

    def test_bad_port_falls_back_to_default(self, config_file):
        proxy = load_system_proxy(True, environ={"HTTPS_PROXY_HOST": "proxy.local", "HTTPS_PROXY_PORT": "abc"})
        assert proxy.port == 443

    def test_proxy_from_config_file(self, config_file):
        set_setting("HTTPS_PROXY_HOST", "filed.local")
        proxy = load_system_proxy(True, environ={})
        assert proxy.host == "filed.local"


class TestDefaultTransport:
    def test_no_proxy(self, config_file):
        transport = default_transport()
        assert transport.proxy is None
        assert transport.verify is True
        transport.close()

    def test_secure_proxy_relaxes_verification(self, config_file, monkeypatch):
        monkeypatch.setenv("HTTPS_PROXY_HOST", "proxy.local")
        transport = default_transport()
        assert transport.proxy == ProxySettings("proxy.local", 443, True)
        assert transport.verify is False
        transport.close()

    def test_plain_proxy_keeps_verification(self, config_file, monkeypatch):
        monkeypatch.setenv("HTTP_PROXY_HOST", "proxy.local")
        transport = default_transport()
        assert transport.proxy == ProxySettings("proxy.local", 80, False)
        assert transport.verify is True
        transport.close()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
