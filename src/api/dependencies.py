import logging
from functools import lru_cache

from fastapi import Depends

from src.integrations.clients.mocks.flutterwave import FlutterwaveMockClient
from src.integrations.clients.real_http.flutterwave import FlutterwaveClient
from src.integrations.contracts.interfaces import PaymentGateway
from src.utils.config_loader import GatewayConfig, Settings, load_gateway_config, load_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_gateway_config() -> GatewayConfig:
    return load_gateway_config()


def get_payment_gateway(
    settings: Settings = Depends(get_settings),
    config: GatewayConfig = Depends(get_gateway_config),
) -> PaymentGateway:
    """Pick the real Flutterwave client or the mock, in this one place only."""
    if settings.use_real_gateway():
        return FlutterwaveClient(
            secret_key=settings.secret_key,
            base_url=config.gateway.base_url,
            timeout_seconds=config.gateway.timeout_seconds,
        )
    logger.debug("INTEGRATIONS_MODE=%s; using mock gateway", settings.integrations_mode)
    return FlutterwaveMockClient()
