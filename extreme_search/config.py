from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Anthropic / OpenRouter
    anthropic_api_key: str = ""
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api"
    openrouter_model: str = ""
    default_model: str = "claude-sonnet-4-5"
    planner_model: str = ""  # optional override for plan generation only

    # Exa (search + fast full-text contents)
    exa_api_key: str = ""
    exa_base_url: str = "https://api.exa.ai"

    # Firecrawl (per-URL scrape fallback)
    firecrawl_api_key: str = ""
    firecrawl_base_url: str = "https://api.firecrawl.dev"

    # Research limits
    search_max_results: int = 8
    content_max_chars: int = 3000
    content_preview_chars: int = 500
    max_query_chars: int = 150
    step_error_allowance: int = 2
    planner_max_tokens: int = 2048
    agent_max_tokens: int = 8192
    agent_temperature: float = 0.0

    # Timeouts (seconds)
    research_timeout_seconds: float = 900.0
    http_timeout_seconds: float = 30.0
    scrape_timeout_seconds: float = 60.0

    # App
    cors_origins: str = "http://localhost:3000"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
