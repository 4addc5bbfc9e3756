"""
Configuration loader for the checkout gateway proxy
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "gateway_config.yml"
MOCK_MODES = frozenset({"mock", "test"})


class GatewaySettings(BaseModel):
    """Outbound charge gateway settings"""

    base_url: str = "https://api.flutterwave.com/v3"
    timeout_seconds: float = Field(default=10.0, gt=0, le=120)
    currency: str = "KES"
    default_customer_name: str = "Customer"
    redirect_url: str = ""
    logo_url: str = "https://flutterwave.com/images/logo-colored.svg"


class PollingSettings(BaseModel):
    """Status polling used by scripts/poll_payment_status.py"""

    interval_seconds: float = Field(default=5.0, gt=0)
    max_attempts: int = Field(default=60, ge=1)


class GatewayConfig(BaseModel):
    """Complete non-secret configuration"""

    service_name: str = "Flutterwave Payment API"
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    polling: PollingSettings = Field(default_factory=PollingSettings)


class Settings(BaseModel):
    """Secrets and process settings read from the environment"""

    secret_key: str = ""
    encryption_key: str = ""
    environment: str = "production"
    integrations_mode: str = ""
    port: int = 5000

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    def masked_secret_key(self) -> str:
        return f"{self.secret_key[:10]}..." if self.secret_key else "<unset>"

    def use_real_gateway(self) -> bool:
        """Real gateway unless INTEGRATIONS_MODE explicitly asks for the mock."""
        return self.integrations_mode.strip().lower() not in MOCK_MODES


def load_gateway_config(config_path: Optional[Path] = None) -> GatewayConfig:
    """
    Load and validate gateway configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to $GATEWAY_CONFIG_PATH,
            then config/gateway_config.yml

    Returns:
        Validated GatewayConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        env_path = os.getenv("GATEWAY_CONFIG_PATH")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = GatewayConfig(**config_data)
        logger.info("Successfully loaded gateway config from %s", config_path)
        return config
    except ValidationError as e:
        logger.error("Gateway config validation failed: %s", e)
        raise


def load_settings() -> Settings:
    """Read secrets from the environment (and .env when present)."""
    load_dotenv()
    return Settings(
        secret_key=os.getenv("SECRET_KEY", ""),
        encryption_key=os.getenv("ENCRYPTION_KEY", ""),
        environment=os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "production")),
        integrations_mode=os.getenv("INTEGRATIONS_MODE", ""),
        port=int(os.getenv("PORT", "5000")),
    )
