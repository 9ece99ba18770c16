from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": "../.env",
        "extra": "ignore",
        "env_prefix": "",
        "case_sensitive": False,
    }

    # Korea Tourism Organization open API (KorService2)
    tour_api_key: str = ""  # server-side key, preferred
    next_public_tour_api_key: str = ""  # public fallback
    tour_api_base_url: str = "https://apis.data.go.kr/B551011/KorService2"
    tour_api_mobile_os: str = "ETC"
    tour_api_mobile_app: str = "MyTrip"
    tour_api_timeout_seconds: float = 10.0
    tour_api_max_retries: int = 3

    # App
    site_url: str = ""
    environment: str = "development"
    log_level: str = "INFO"

    def resolve_tour_api_key(self) -> str | None:
        """Server-side key wins over the public one; None when neither is set."""
        return self.tour_api_key or self.next_public_tour_api_key or None


settings = Settings()


def current_tour_api_key() -> str | None:
    """The credential as the environment has it now, not as it was at import."""
    return Settings().resolve_tour_api_key()
