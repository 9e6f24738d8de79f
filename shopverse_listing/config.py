from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Backend REST API (the dashboard and storefront share one base URL)
    api_base_url: str = "http://localhost:5000/api"
    request_timeout: float = 30.0

    # Pagination defaults
    default_par_page: int = 9
    storefront_par_page: int = 3
    default_show_item: int = 3

    # Catalog served by the bundled API (JSON list of products)
    catalog_path: str | None = None
    latest_product_count: int = 3

    log_level: str = "INFO"


settings = Settings()
