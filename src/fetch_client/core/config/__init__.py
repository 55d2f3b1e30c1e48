# Configuration package

from fetch_client.core.config.client_config import ClientConfig, validate_base_url

__all__ = ["ClientConfig", "validate_base_url"]
