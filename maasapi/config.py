"""Configuration management for the MAAS API client."""

import os
from typing import List, Optional
from dotenv import load_dotenv

from maasapi.controller import SUPPORTED_API_VERSIONS

# Load environment variables
load_dotenv()


class MAASConfig:
    """Connection settings read from the environment."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # MAAS connection
        self.maas_url: str = os.getenv('MAAS_URL', '')
        self.api_version: Optional[str] = os.getenv('MAAS_API_VERSION') or None
        self.verify_ssl: bool = os.getenv('VERIFY_SSL', 'true').lower() == 'true'
        self.timeout: float = self._parse_timeout(os.getenv('MAAS_TIMEOUT', '30'))

        # Validate required settings
        self._validate()

    @staticmethod
    def _parse_timeout(value: str) -> float:
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"MAAS_TIMEOUT must be a number, got {value!r}")

    def _validate(self) -> None:
        """Validate that required configuration is present."""
        if not self.maas_url:
            raise ValueError("MAAS_URL is required")

        if self.timeout <= 0:
            raise ValueError("MAAS_TIMEOUT must be positive")

        if self.api_version and self.api_version not in SUPPORTED_API_VERSIONS:
            raise ValueError(
                f"MAAS_API_VERSION {self.api_version} is not supported; "
                f"expected one of {', '.join(SUPPORTED_API_VERSIONS)}"
            )

    @property
    def api_versions(self) -> List[str]:
        """Return the API versions to try when connecting."""
        return [self.api_version] if self.api_version else list(SUPPORTED_API_VERSIONS)
