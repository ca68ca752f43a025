"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import List


class LedgerConfig(BaseSettings):
    """Bank ledger configuration"""
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8081
    api_reload: bool = False  # Set to True for development
    cors_allow_origins: List[str] = ["*"]
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    # Sequence configuration
    account_number_prefix: str = "ACC"
    account_sequence_start: int = 1000  # First account gets start + 1
    transaction_id_prefix: str = "TX"
    transaction_sequence_start: int = 1  # First transaction gets start
    
    # Bootstrap
    seed_demo_data: bool = False
    
    class Config:
        env_prefix = "BANK_LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
