"""12-factor configuration adapter using environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from station_catalog.domain.models import PaginationMode


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8080, description="Port to bind the server to")
    index_text: str = Field(
        default="Station catalog", description="Plain-text body served at GET /"
    )

    # Yandex Rasp API configuration
    yandex_rasp_api_key: str | None = Field(
        default=None,
        description="API key for the station directory (only needed when the store is empty)",
    )
    yandex_api_url: str = Field(
        default="https://api.rasp.yandex.net/v3.0/stations_list/",
        description="Endpoint returning the full station directory",
    )
    yandex_api_lang: str = Field(default="ru_RU", description="Language of directory titles")
    http_timeout_seconds: float = Field(
        default=30.0, description="Total timeout for outbound HTTP requests in seconds"
    )

    # MongoDB configuration
    mongo_uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection string"
    )
    mongo_database: str = Field(default="station_db", description="MongoDB database name")
    mongo_collection: str = Field(default="stations", description="MongoDB collection name")
    mongo_app_name: str = Field(
        default="StationFetcher", description="Application name reported to MongoDB"
    )

    # Query configuration
    pagination_mode: PaginationMode = Field(
        default=PaginationMode.PAGE,
        description="Pagination convention: 'page' (page/page_size) or 'offset' (offset/limit)",
    )
    default_page_size: int = Field(
        default=10, description="Default page_size (or limit) when none is requested"
    )

    # Enrichment configuration
    entity_page_url_template: str = Field(
        default="https://rasp.yandex.ru/station/{entity_id}/",
        description="URL of a single entity page, with an {entity_id} placeholder",
    )
    entity_title_selector: str = Field(
        default="h1", description="CSS selector of the title node on an entity page"
    )
    entity_address_selector: str = Field(
        default="address", description="CSS selector of the address node on an entity page"
    )
    enrichment_concurrency: int = Field(
        default=32, description="Maximum number of entity pages fetched at once"
    )
    enrichment_progress_every: int = Field(
        default=100, description="Log enrichment progress after this many completions"
    )
    enrichment_max_range: int = Field(
        default=1000, description="Largest identifier range accepted by the HTTP endpoint"
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute (0 disables)",
    )

    @field_validator("pagination_mode", mode="before")
    @classmethod
    def validate_pagination_mode(cls, v: object) -> object:
        """Validate pagination mode is either 'page' or 'offset'."""
        if isinstance(v, str):
            if v.lower() not in ("page", "offset"):
                raise ValueError("pagination_mode must be either 'page' or 'offset'")
            return v.lower()
        return v

    @field_validator(
        "default_page_size",
        "enrichment_concurrency",
        "enrichment_progress_every",
        "enrichment_max_range",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate counts and sizes are positive."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator("rate_limit_per_minute")
    @classmethod
    def validate_rate_limit(cls, v: int) -> int:
        """Validate rate limit is not negative."""
        if v < 0:
            raise ValueError("rate_limit_per_minute must not be negative")
        return v

    @field_validator("entity_page_url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        """Validate the entity page URL template has an {entity_id} placeholder."""
        if "{entity_id}" not in v:
            raise ValueError("entity_page_url_template must contain '{entity_id}'")
        return v
