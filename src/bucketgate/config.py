from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings

DEFAULT_PUBLIC_PATH = Path(__file__).parent / "web" / "public"


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 4000
    debug: bool = False
    credentials_path: Path = Path("config.json")  # JSON list of {username, password} entries
    public_path: Path = DEFAULT_PUBLIC_PATH  # login.html, index.html and static assets
    cors_origins: list[str] = ["*"]
    cookie_secure: bool = False  # Set to True in production with HTTPS
    session_idle_timeout: int | None = None  # Seconds of inactivity after which any session is dropped

    # S3-compatible content store (MinIO in development)
    storage_endpoint: str = "http://localhost:9000"
    storage_access_key: SecretStr = SecretStr("")
    storage_secret_key: SecretStr = SecretStr("")
    storage_region: str = "us-east-1"
    storage_bucket: str = "uploads"
    storage_create_bucket: bool = True  # Create the bucket on startup if it does not exist
    storage_connect_timeout: float = 10.0
    storage_read_timeout: float = 60.0

    upload_chunk_size: int = 8 * 1024 * 1024  # Multipart part size, bounds memory per upload
    download_chunk_size: int = 64 * 1024

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BUCKETGATE_",
        "extra": "ignore",
    }
