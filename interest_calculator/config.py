"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class InterestCalculatorConfig(BaseSettings):
    """Interest calculator configuration"""

    # Arithmetic configuration
    decimal_precision: int = 38  # Significant digits for intermediate values
    monetary_places: int = 2

    # Output configuration
    output_locale: str = "en"  # en or sq
    output_date_format: str = "%Y.%m.%d"

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    api_debug: bool = False

    class Config:
        env_prefix = "INTEREST_CALC_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = InterestCalculatorConfig()


def get_config() -> InterestCalculatorConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> InterestCalculatorConfig:
    """Reload configuration from environment"""
    global config
    config = InterestCalculatorConfig()
    return config
