from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LocationSettings(BaseModel):
    """Document library and reporting metadata for one location."""

    site_path: str
    library: str
    region: str = ""
    discipline: str = ""


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", protected_namespaces=())

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "agenda_insights"
    db_username: str = "agenda"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    pdf_engine: str = "pdfplumber"

    document_source: str = "graph"
    graph_tenant_id: str = ""
    graph_client_id: str = ""
    graph_client_secret: str = ""
    graph_tenant_domain: str = ""
    graph_timeout_seconds: int = 30
    local_files_root: str = "/app/files"

    model_provider: str = "azure"
    model_api_key: str = ""
    model_name: str = ""
    model_base_url: str = ""
    model_timeout_seconds: int = 60
    model_temperature: float = 0.2
    model_max_tokens: int = 2000
    model_system_prompt: str = (
        "You are a helpful assistant that extracts structured project data "
        "from city council documents."
    )
    azure_openai_endpoint: str = ""
    azure_openai_api_version: str = "2024-06-01"

    locations: dict[str, LocationSettings] = Field(default_factory=dict)
