from shortlinks.core.config import Settings


def test_database_url_prefers_explicit_url():
    settings = Settings(DATABASE_URL="sqlite:///:memory:", POSTGRES_SERVER="db")
    assert settings.database_url == "sqlite:///:memory:"


def test_database_url_from_postgres_parts():
    settings = Settings(
        DATABASE_URL=None,
        POSTGRES_USER="u",
        POSTGRES_PASSWORD="p",
        POSTGRES_SERVER="db",
        POSTGRES_DB="links",
    )
    assert settings.database_url == "postgresql://u:p@db:5432/links"
