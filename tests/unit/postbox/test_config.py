from postbox.config import Settings, get_settings


def test_defaults(monkeypatch):
    for name in (
        "POSTBOX_HOST",
        "POSTBOX_PORT",
        "POSTBOX_LOG_LEVEL",
        "POSTBOX_CORS_ORIGINS",
        "POSTBOX_GZIP_MINIMUM_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ["*"]
    assert settings.gzip_minimum_size == 500


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("POSTBOX_HOST", "127.0.0.1")
    monkeypatch.setenv("POSTBOX_PORT", "9090")
    monkeypatch.setenv("POSTBOX_LOG_LEVEL", "debug")
    monkeypatch.setenv("POSTBOX_CORS_ORIGINS", "http://a.test, http://b.test")

    settings = get_settings()

    assert settings.host == "127.0.0.1"
    assert settings.port == 9090
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_unset_variables_keep_field_defaults(monkeypatch):
    monkeypatch.delenv("POSTBOX_HOST", raising=False)
    monkeypatch.delenv("POSTBOX_LOG_LEVEL", raising=False)
    monkeypatch.delenv("POSTBOX_CORS_ORIGINS", raising=False)
    monkeypatch.setenv("POSTBOX_PORT", "8181")
    monkeypatch.setenv("POSTBOX_GZIP_MINIMUM_SIZE", "1024")

    settings = get_settings()

    assert settings.port == 8181
    assert settings.gzip_minimum_size == 1024
    assert settings.host == Settings.model_fields["host"].default
    assert settings.cors_origins == ["*"]
