from weekplanner.core.config import Settings


def test_defaults_match_documented_values():
    settings = Settings(LOG_TO_FILE=False)

    assert settings.api_port == 4000
    assert settings.graphql_path == "/graphql"
    assert settings.upload_dir == "files"
    assert settings.notify_changes is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("UPLOAD_DIR", "/srv/uploads")
    monkeypatch.setenv("NOTIFY_CHANGES", "false")

    settings = Settings()

    assert settings.api_port == 8080
    assert settings.upload_dir == "/srv/uploads"
    assert settings.notify_changes is False


def test_masked_mongodb_url_hides_password():
    settings = Settings(MONGODB_URL="mongodb://planner:s3cret@db:27017/admin")

    assert settings.masked_mongodb_url == "mongodb://planner:****@db:27017/admin"
    assert Settings(MONGODB_URL="mongodb://db:27017").masked_mongodb_url == "mongodb://db:27017"
