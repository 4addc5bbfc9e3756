"""
Utility modules for the checkout gateway proxy
"""
from .config_loader import GatewayConfig, Settings, load_gateway_config, load_settings

__all__ = [
    'GatewayConfig',
    'Settings',
    'load_gateway_config',
    'load_settings',
]
