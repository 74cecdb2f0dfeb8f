"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from fraud_insight.domain.models import RiskThresholds


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FRAUD_INSIGHT_",
        extra="ignore",
    )

    # External Services
    statistics_api_base: str = "http://localhost:8080/api"

    # Session storage
    session_file: str = ".fraud_insight_session.json"

    # Service
    service_name: str = "fraud-insight"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 10.0

    # Snapshot sizes and presentation windows
    timeline_fetch_size: int = 1000
    analysis_fetch_size: int = 100
    timeline_window_days: int = 30
    timeline_row_limit: int = 100
    analysis_row_limit: int = 50
    customer_timeline_limit: int = 20
    top_customers_limit: int = 10

    # Decision thresholds (fraud probability, 0-1)
    block_threshold: float = 0.85
    review_threshold: float = 0.50

    # Customer risk level thresholds (fraud rate, percent)
    high_fraud_rate: float = 5.0
    critical_fraud_rate: float = 20.0

    # Per-transaction risk score bands (0-100)
    high_risk_score: float = 70.0
    medium_risk_score: float = 40.0

    def risk_thresholds(self) -> RiskThresholds:
        """Collect classifier thresholds into a single policy object"""
        return RiskThresholds(
            block=self.block_threshold,
            review=self.review_threshold,
            high_fraud_rate=self.high_fraud_rate,
            critical_fraud_rate=self.critical_fraud_rate,
            high_risk_score=self.high_risk_score,
            medium_risk_score=self.medium_risk_score,
        )


settings = Settings()
