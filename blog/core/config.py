import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class Settings:
    database_url: str
    images_dir: str
    static_dir: str
    avatar_fetch_timeout: float
    log_level: str
    host: str
    port: int

    @property
    def thumbnails_dir(self) -> str:
        return os.path.join(self.images_dir, "thumbnails")

    @property
    def avatars_dir(self) -> str:
        return os.path.join(self.images_dir, "avatars")


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./blog.db"),
        images_dir=os.getenv("IMAGES_DIR", "images"),
        static_dir=os.getenv("STATIC_DIR", "static"),
        # Bounds a slow avatar source; the request is never retried
        avatar_fetch_timeout=float(os.getenv("AVATAR_FETCH_TIMEOUT", "5")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


settings = load_settings()


def get_settings() -> Settings:
    return settings
