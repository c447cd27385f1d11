"""Tests for settings, logging setup and dependency wiring."""
from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import graypy
import pytest

from myip import dependencies
from myip.config import Settings, split_host_port
from myip.domain.errors import ConfigurationError
from myip.infrastructure.rdap_client import RdapClient
from myip.logging_config import build_handler, configure_logging
from myip.services.cache.memory_backend import InMemoryBackend
from myip.services.cache.redis_backend import RedisBackend


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("STORE_TYPE", "REDIS", "RDAP_API", "LOG_TYPE", "REQUEST_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.STORE_TYPE == "redis"
        assert settings.REDIS == "localhost:6379"
        assert settings.RDAP_API == ""
        assert settings.LOG_TYPE == "console"
        assert settings.REQUEST_TIMEOUT == 3.0
        assert settings.RDAP_TIMEOUT == 5.0

    def test_environment_values_are_stripped(self, monkeypatch):
        monkeypatch.setenv("RDAP_API", "  https://rdap.example.net/ip/{REMOTE_IP}  ")
        monkeypatch.setenv("REDIS", " redis:6379 ")

        settings = Settings(_env_file=None)

        assert settings.RDAP_API == "https://rdap.example.net/ip/{REMOTE_IP}"
        assert settings.REDIS == "redis:6379"

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LOG_TYPE", raising=False)
        monkeypatch.delenv("STORE_TYPE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("# local overrides\nLOG_TYPE=gelf\nSTORE_TYPE=memory\n", encoding="utf-8")

        settings = Settings(_env_file=str(env_file))

        assert settings.LOG_TYPE == "gelf"
        assert settings.STORE_TYPE == "memory"


class TestSplitHostPort:

    @pytest.mark.parametrize("address, expected", [
        ("localhost:6379", ("localhost", 6379)),
        ("redis", ("redis", 1000)),
        ("10.0.0.5:6380", ("10.0.0.5", 6380)),
        ("[::1]:6379", ("::1", 6379)),
        ("[::1]", ("::1", 1000)),
    ])
    def test_split(self, address, expected):
        assert split_host_port(address, 1000) == expected

    def test_empty(self):
        with pytest.raises(ValueError):
            split_host_port("  ", 1000)

    def test_bad_port(self):
        with pytest.raises(ValueError):
            split_host_port("redis:port", 1000)


class TestLogging:

    def test_console(self):
        handler = build_handler("console")
        assert isinstance(handler, logging.StreamHandler)

    def test_unknown_type_falls_back_to_console(self):
        assert isinstance(build_handler("journald"), logging.StreamHandler)

    def test_gelf_without_address_falls_back(self):
        handler = build_handler("gelf", "")
        assert type(handler) is logging.StreamHandler

    def test_gelf(self):
        handler = build_handler("gelf", "graylog.internal:12201")
        try:
            assert isinstance(handler, graypy.GELFUDPHandler)
            assert handler.host == "graylog.internal"
            assert handler.port == 12201
        finally:
            handler.close()

    def test_syslog_over_udp_when_no_local_socket(self):
        with patch("myip.logging_config.os.path.exists", return_value=False):
            handler = build_handler("syslog")
        try:
            assert isinstance(handler, logging.handlers.SysLogHandler)
            assert handler.ident == "myip: "
        finally:
            handler.close()

    def test_syslog_failure_falls_back(self):
        with patch("myip.logging_config._syslog_handler", side_effect=OSError("no syslog")):
            handler = build_handler("system")
        assert type(handler) is logging.StreamHandler

    def test_configure_logging_installs_single_handler(self):
        settings = Settings(_env_file=None, LOG_TYPE="console", LOG_LEVEL="debug")

        app_logger = configure_logging(settings)
        try:
            configure_logging(settings)

            assert len(app_logger.handlers) == 1
            assert app_logger.level == logging.DEBUG
            assert app_logger.propagate is False
        finally:
            for handler in list(app_logger.handlers):
                app_logger.removeHandler(handler)
            app_logger.setLevel(logging.NOTSET)
            app_logger.propagate = True


class TestDependencies:

    @pytest.fixture(autouse=True)
    def clear_caches(self):
        dependencies.get_cache_backend.cache_clear()
        dependencies.get_registry_lookup.cache_clear()
        yield
        dependencies.get_cache_backend.cache_clear()
        dependencies.get_registry_lookup.cache_clear()

    def test_memory_backend(self):
        with patch.object(dependencies.settings, "STORE_TYPE", "memory"):
            assert isinstance(dependencies.get_cache_backend(), InMemoryBackend)

    def test_redis_backend(self):
        with patch.object(dependencies.settings, "STORE_TYPE", "redis"), \
                patch.object(dependencies.settings, "REDIS", "cache.internal:6380"):
            assert isinstance(dependencies.get_cache_backend(), RedisBackend)

    def test_unknown_store_type(self):
        with patch.object(dependencies.settings, "STORE_TYPE", "s3"):
            with pytest.raises(ConfigurationError):
                dependencies.get_cache_backend()

    def test_lookup_disabled_without_template(self):
        with patch.object(dependencies.settings, "RDAP_API", ""):
            assert dependencies.get_registry_lookup() is None

    def test_lookup_enabled_with_template(self):
        with patch.object(dependencies.settings, "RDAP_API", "https://rdap.example.net/ip/{REMOTE_IP}"):
            lookup = dependencies.get_registry_lookup()
        assert isinstance(lookup, RdapClient)

    def test_fetch_service_wiring(self):
        with patch.object(dependencies.settings, "STORE_TYPE", "memory"), \
                patch.object(dependencies.settings, "RDAP_API", ""):
            service = dependencies.get_fetch_service()
        assert service.lookup_enabled is False

    @pytest.mark.asyncio
    async def test_close_resources(self):
        with patch.object(dependencies.settings, "STORE_TYPE", "memory"), \
                patch.object(dependencies.settings, "RDAP_API", "https://rdap.example.net/ip/{REMOTE_IP}"):
            lookup = dependencies.get_registry_lookup()
            dependencies.get_cache_backend()

            await dependencies.close_resources()

        assert lookup._client.is_closed
        assert dependencies.get_cache_backend.cache_info().currsize == 0

    def test_log_error_sink(self, caplog):
        with caplog.at_level(logging.ERROR, logger="myip.dependencies"):
            dependencies.log_error(RuntimeError("incr count:1.2.3.4: connection refused"))
        assert "connection refused" in caplog.text
