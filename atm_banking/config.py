"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class AtmConfig(BaseSettings):
    """ATM backend configuration"""
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    # Ledger configuration
    currency: str = "INR"
    max_customers: int = 100
    
    # Default credential pool
    credential_pool_size: int = 10
    customer_id_prefix: str = "CUST"
    password_prefix: str = "PASS"
    
    # Opening balances (Decimal strings)
    savings_opening_balance: str = "10000.00"
    current_opening_balance: str = "25000.00"
    
    # Business rules configuration
    savings_minimum_balance: str = "1000.00"
    savings_penalty: str = "50.00"
    current_minimum_balance: str = "5000.00"
    current_penalty: str = "250.00"
    
    # Input rules enforced at the API boundary
    password_min_length: int = 6
    name_min_length: int = 2
    address_min_length: int = 5
    phone_digits: int = 10
    
    class Config:
        env_prefix = "ATM_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = AtmConfig()


def get_config() -> AtmConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AtmConfig:
    """Reload configuration from environment"""
    global config
    config = AtmConfig()
    return config
