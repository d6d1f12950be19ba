from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    storage_provider: str = "s3"
    storage_bucket: str = "contract-service"
    storage_key_prefix: str = "contract/origin-images/"
    storage_local_root: str = "/app/files"

    aws_region: str = "ap-northeast-2"
    aws_endpoint_url: str | None = None

    upload_max_workers: int = 10
    max_file_count: int = 10
    max_file_size_bytes: int = 20 * 1024 * 1024
    allowed_content_types: list[str] = ["image/jpeg", "image/jpg", "image/png"]
    expected_count_policy: str = "warn"

    workflow_provider: str = "stepfunctions"
    workflow_name: str = "contract_analysis"
    workflow_state_machines: dict[str, str] = {}
    workflow_base_url: str = ""
    workflow_api_key: str = ""
    workflow_timeout_seconds: int = 900
