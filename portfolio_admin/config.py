"""Application configuration using Pydantic Settings"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables"""

    # App
    app_name: str = "Portfolio Admin"
    debug: bool = False

    # API
    api_url: str = "http://localhost:5000/api"
    request_timeout: float = 10.0
    upload_timeout: float = 120.0

    # Media
    placeholder_project_id: str = "temp"
    allow_offline_media_removal: bool = False
    max_image_uploads: int = 5
    max_video_uploads: int = 3

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
