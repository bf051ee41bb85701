from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Jurisdiction / record store
    jurisdiction_keyword: str = "Silay"
    records_collection: str = "EPWD"
    records_id_field: str = "PWD_ID_NO"

    # Firebase (service account JSON, as downloaded from the console)
    firebase_service_account: str = ""
    firebase_project_id: str | None = None

    # OCR.space
    ocr_api_key: str = ""
    ocr_api_url: str = "https://api.ocr.space/parse/image"
    ocr_engine: str = "2"
    ocr_max_attempts: int = 3

    # Face++
    face_api_key: str = ""
    face_api_secret: str = ""
    face_api_url: str = "https://api-us.faceplusplus.com/facepp/v3/compare"

    # Push relay (Expo)
    push_api_url: str = "https://exp.host/--/api/v2/push/send"
    push_access_token: str = ""

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # Frontend
    cors_origins: list[str] = ["*"]

    # Rate limiting
    rate_limit_enabled: bool = False
    rate_limit_storage_uri: str = "memory://"
    rate_limit_general_per_minute: int = 100
    rate_limit_scan_per_minute: int = 20
    rate_limit_face_per_minute: int = 20
    rate_limit_push_per_minute: int = 60

    # Request size limits (base64 photos are large)
    max_request_size_bytes: int = 20 * 1024 * 1024  # 20MB

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
