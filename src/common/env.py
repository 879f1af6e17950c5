"""Environment configuration interface for include-region-build.

All environment variable access goes through this module.
"""

import os
import re

from dotenv import load_dotenv

from .constants import DEFAULT_GITHUB_API_URL

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def log_level() -> str:
        """Get the default log level.

        Returns:
            Log level name, defaults to 'INFO'
        """
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def github_api_url() -> str:
        """Get the GitHub REST API base URL.

        Returns:
            API URL without trailing slash, defaults to the public GitHub API
        """
        return os.getenv("GITHUB_API_URL", DEFAULT_GITHUB_API_URL).rstrip("/")

    @staticmethod
    def github_token(credentials_id: str | None = None) -> str | None:
        """Get the GitHub token for a credential identifier.

        A credential-specific variable ``GITHUB_TOKEN_<ID>`` wins over the
        shared ``GITHUB_TOKEN``. The identifier is upper-cased and every
        character outside ``[A-Z0-9]`` becomes ``_``.

        Args:
            credentials_id: Opaque credential identifier, or None

        Returns:
            Token string, or None when nothing is configured
        """
        if credentials_id:
            suffix = re.sub(r"[^A-Z0-9]", "_", credentials_id.upper())
            token = os.getenv(f"GITHUB_TOKEN_{suffix}")
            if token:
                return token
        return os.getenv("GITHUB_TOKEN") or None

    @staticmethod
    def github_timeout() -> float | None:
        """Get the GitHub request timeout in seconds.

        Returns:
            Timeout in seconds, or None (no timeout) when unset
        """
        value = os.getenv("GITHUB_TIMEOUT")
        return float(value) if value else None

    @staticmethod
    def included_regions() -> str:
        """Get the default newline-separated include region configuration.

        Returns:
            Region configuration string, defaults to empty
        """
        return os.getenv("INCLUDED_REGIONS", "")


# Singleton instance for convenient access
env = Environment()
