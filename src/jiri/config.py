"""Credential loading for the Jira REST API.

All three values come from the environment:
    JIRA_API_USERNAME  — Atlassian account email
    JIRA_API_TOKEN     — API token
    JIRA_SITE          — Base site URL, e.g. https://your-org.atlassian.net

The username and token are combined into a Basic Authorization header.
"""

import os

REQUIRED_ENV = ("JIRA_API_USERNAME", "JIRA_API_TOKEN", "JIRA_SITE")

TOKEN_URL = "https://id.atlassian.com/manage-profile/security/api-tokens"


class ConfigError(Exception):
    """Jira configuration error — required environment variables missing."""
    pass


def missing_keys(environ=None):
    """Return the required variable names that are unset or empty."""
    env = environ if environ is not None else os.environ
    return [k for k in REQUIRED_ENV if not env.get(k)]


def config_help():
    return (
        "Required environment variables:\n"
        "  JIRA_API_USERNAME - your Atlassian account email\n"
        f"  JIRA_API_TOKEN    - API token from {TOKEN_URL}\n"
        "  JIRA_SITE         - Base Jira site URL, e.g. https://your-org.atlassian.net"
    )


def load_config(environ=None):
    """Load Jira credentials from the environment.

    Args:
        environ: Mapping to read instead of os.environ.

    Returns:
        Dict with keys: user, token, site (without trailing slash).

    Raises:
        ConfigError if any required variable is missing.
    """
    env = environ if environ is not None else os.environ
    missing = missing_keys(env)
    if missing:
        raise ConfigError(
            "Missing environment: JIRA_API_USERNAME, JIRA_API_TOKEN, and JIRA_SITE are all required.\n"
            + config_help()
        )
    return {
        "user": env["JIRA_API_USERNAME"],
        "token": env["JIRA_API_TOKEN"],
        "site": env["JIRA_SITE"].rstrip("/"),
    }


def get_api_url(cfg, path):
    """Join the configured site and an API path like '/rest/api/3/field'."""
    if not path.startswith("/"):
        path = "/" + path
    return f"{cfg['site']}{path}"
