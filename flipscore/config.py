from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # API Keys
    anthropic_api_key: str = ""

    # Assistant
    assistant_model: str = "claude-haiku-4-5"
    assistant_max_tokens: int = 600

    # Sharing
    share_url: str = "http://localhost:8050/"
    share_hashtags: str = "realestate,houseflipping"

    # Promotional call-to-action on the dashboard; empty URL hides it
    promo_url: str = ""
    promo_text: str = "Found a deal worth chasing? Get funding and comps for your next flip."

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    dashboard_port: int = 8050


settings = Settings()
