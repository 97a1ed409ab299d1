"""
Configuration manager for batchcall.

This module provides a centralized way to access all configuration settings
across the package. It combines all configuration classes into a single
easy-to-use interface.
"""

import logging
from typing import Optional
from .base import BaseConfig, ConfigError
from .chains import ChainConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Centralized configuration manager that combines all configuration classes.

    This class provides easy access to all configuration settings and ensures
    that configurations are properly initialized and validated.
    """

    def __init__(self, environment: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            environment: Override the environment (local, dev, test, staging, production)
        """
        self._environment = environment
        self._base_config = None
        self._chain_config = None
        self._initialize_configs()

    def _initialize_configs(self):
        """Initialize all configuration objects."""
        try:
            # Initialize base configuration first
            self._base_config = BaseConfig()
            if self._environment:
                self._base_config.ENVIRONMENT = self._environment
                self._base_config._validate_config()

            self._chain_config = ChainConfig()

            logger.debug(f"Configuration initialized for environment: {self.environment}")

        except Exception as e:
            raise ConfigError(f"Configuration initialization failed: {e}") from e

    @property
    def environment(self) -> str:
        """Get current environment."""
        return self._base_config.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        """Get base configuration."""
        return self._base_config

    @property
    def chains(self) -> ChainConfig:
        """Get chain configuration."""
        return self._chain_config

    def validate_configuration(self) -> bool:
        """
        Validate all configuration settings.

        Returns:
            True if all configurations are valid

        Raises:
            ConfigError: If any configuration is invalid
        """
        supported_chains = self.chains.supported_chains
        if not supported_chains:
            raise ConfigError("No chains configured")

        if self.chains.DEFAULT_CHAIN not in supported_chains:
            raise ConfigError(f"Unsupported default chain: {self.chains.DEFAULT_CHAIN}")

        for chain_name, chain in supported_chains.items():
            if not chain["rpc_url"].startswith(("http://", "https://")):
                raise ConfigError(f"Invalid RPC URL for {chain_name}: {chain['rpc_url']}")
            if self.chains.get_multicall_address(chain["chain_id"]) is None:
                logger.warning(f"No multicall address for {chain_name}")

        logger.debug("Configuration validation successful")
        return True

    def __repr__(self) -> str:
        """String representation of the configuration manager."""
        return f"ConfigManager(environment={self.environment})"


# Global configuration manager instance
_config_manager = None


def get_config(environment: Optional[str] = None, force_reload: bool = False) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        environment: Override environment
        force_reload: Force reload of configuration

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None or force_reload:
        _config_manager = ConfigManager(environment=environment)
        _config_manager.validate_configuration()

    return _config_manager


def reload_config(environment: Optional[str] = None) -> ConfigManager:
    """
    Reload the global configuration manager.

    Args:
        environment: Override environment

    Returns:
        New ConfigManager instance
    """
    return get_config(environment=environment, force_reload=True)
