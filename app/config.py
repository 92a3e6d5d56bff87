import os

from dotenv import load_dotenv
from pydantic import BaseModel
from sqlalchemy.engine import URL

DEFAULT_DATABASE_URL = "sqlite:///./photos.db"
DEFAULT_PORT = 3000
MYSQL_DRIVER = "mysql+pymysql"


def database_url_from_env() -> str:
    """
    DATABASE_URL wins; otherwise DB_HOST, DB_USER, DB_PASS and DB_NAME describe
    a MySQL metadata store. Without either, fall back to a local SQLite file.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("DB_HOST")
    if not host:
        return DEFAULT_DATABASE_URL
    port = os.getenv("DB_PORT")
    return URL.create(
        MYSQL_DRIVER,
        username=os.getenv("DB_USER") or None,
        password=os.getenv("DB_PASS") or None,
        host=host,
        port=int(port) if port else None,
        database=os.getenv("DB_NAME") or None,
    ).render_as_string(hide_password=False)


class Settings(BaseModel):
    """Runtime configuration, built once at startup."""

    database_url: str = DEFAULT_DATABASE_URL
    storage_backend: str = "s3"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_region: str = "us-east-1"
    aws_bucket_name: str | None = None
    s3_endpoint_url: str | None = None
    media_root: str = "./media"
    media_base_url: str | None = None
    cors_origins: list[str] = ["*"]
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from the process environment, loading .env first.
        """
        load_dotenv()
        port = int(os.getenv("PORT") or DEFAULT_PORT)
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=database_url_from_env(),
            storage_backend=os.getenv("STORAGE_BACKEND", "s3").lower(),
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID") or None,
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY") or None,
            aws_region=os.getenv("AWS_REGION") or "us-east-1",
            aws_bucket_name=os.getenv("AWS_BUCKET_NAME") or None,
            s3_endpoint_url=os.getenv("S3_ENDPOINT_URL") or None,
            media_root=os.getenv("MEDIA_ROOT", "./media"),
            media_base_url=os.getenv("MEDIA_BASE_URL")
            or f"http://localhost:{port}/media",
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            port=port,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
