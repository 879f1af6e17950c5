"""Shared constants for include-region-build.

For environment-based configuration use the env module:
    from common.env import env
    api_url = env.github_api_url()
"""

# Name shown when the strategy is listed by a build host
DISPLAY_NAME = "Build included regions strategy"

DEFAULT_GITHUB_API_URL = "https://api.github.com"

USER_AGENT = "include-region-build/1.0"

# Ant-style path separator used by include region patterns
PATH_SEPARATOR = "/"
