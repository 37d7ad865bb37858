"""Jira Cloud REST API client.

Requests go through urllib with a Basic Authorization header built from the
configured username and API token. TLS is verified against certifi's CA bundle.

Usage as library:
    from jiri.client import JiraClient
    client = JiraClient()
    projects = client.projects()["values"]
    issues, more = client.search_all("project = ABC", ["summary"], limit=250)
    lookup = client.field_lookup()
"""

import base64
import json
import ssl
import urllib.error
import urllib.parse
import urllib.request

import certifi

from jiri.config import get_api_url, load_config
from jiri.fields import FieldLookup

DEFAULT_TIMEOUT = 60
PAGE_SIZE = 100
DEFAULT_LIMIT = 1000

PROJECTS_PATH = "/rest/api/3/project/search"
SEARCH_PATH = "/rest/api/3/search/jql"
FIELDS_PATH = "/rest/api/3/field"
ISSUE_PATH = "/rest/api/3/issue/{key}"


class JiraError(Exception):
    """Failed Jira request (HTTP error status, connection failure, timeout)."""
    def __init__(self, message, status=None, body="", hints=None):
        super().__init__(message)
        self.status = status
        self.body = body
        self.hints = hints or []


# --- Low-level request ---

def _make_ssl_context():
    return ssl.create_default_context(cafile=certifi.where())


def basic_auth_header(user, token):
    credentials = base64.b64encode(f"{user}:{token}".encode()).decode()
    return f"Basic {credentials}"


def _hints_for(status, path):
    hints = []
    if status == 401:
        hints.append("Check JIRA_API_USERNAME and JIRA_API_TOKEN")
    elif status == 403:
        hints.append("Your account may not have permission for this resource")
    elif status == 404:
        hints.append("Check JIRA_SITE and the issue or project key")
    elif status == 400 and path.startswith(SEARCH_PATH):
        hints.append("Check the JQL syntax")
    return hints


def jira_request(path, method="GET", body=None, headers=None, config=None, timeout=DEFAULT_TIMEOUT):
    """Send one request to the Jira REST API.

    Args:
        path: API path relative to the site, e.g. "/rest/api/3/field".
        method: HTTP method.
        body: JSON-serializable request body, or None.
        headers: Extra headers (override the defaults).
        config: Config dict from load_config(). Loaded from the environment if None.
        timeout: Socket timeout in seconds.

    Returns:
        Parsed JSON response, or None for an empty body.

    Raises:
        JiraError on non-success status, connection failure, or timeout.
    """
    cfg = config if config is not None else load_config()

    req_headers = {
        "Authorization": basic_auth_header(cfg["user"], cfg["token"]),
        "Accept": "application/json",
    }
    data = None
    if body is not None:
        data = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"
    req_headers.update(headers or {})

    req = urllib.request.Request(
        get_api_url(cfg, path),
        data=data,
        headers=req_headers,
        method=method,
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout, context=_make_ssl_context()) as resp:
            text = resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        error_body = ""
        try:
            error_body = e.read().decode("utf-8")
        except (OSError, UnicodeDecodeError):
            pass
        raise JiraError(
            f"Jira request failed {e.code}: {error_body}",
            status=e.code,
            body=error_body,
            hints=_hints_for(e.code, path),
        )
    except urllib.error.URLError as e:
        raise JiraError(f"Could not connect to Jira site {cfg['site']}: {e.reason}")
    except TimeoutError:
        raise JiraError(f"Jira request timed out after {timeout}s.")

    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        raise JiraError(f"Jira returned non-JSON response:\n{text[:500]}", body=text)


# --- JiraClient class ---

class JiraClient:
    """High-level client for the Jira REST API.

    Config is loaded from the environment on first use if not provided. The
    field catalog is fetched at most once per client.
    """

    def __init__(self, config=None, request=None):
        """Initialize the client.

        Args:
            config: Config dict. If None, loads via load_config().
            request: Callable with jira_request's signature, for tests.
        """
        self._config = config
        self._request = request or jira_request
        self._field_cache = None

    def _cfg(self):
        if self._config is None:
            self._config = load_config()
        return self._config

    def request(self, path, method="GET", body=None, headers=None):
        return self._request(path, method=method, body=body, headers=headers, config=self._cfg())

    def projects(self):
        """List projects visible to the user. Returns the raw page dict."""
        return self.request(PROJECTS_PATH) or {}

    def search(self, jql, fields, max_results=PAGE_SIZE, next_page_token=None):
        """Fetch one page of JQL search results. Returns the raw page dict."""
        body = {"jql": jql, "fields": list(fields), "maxResults": max_results}
        if next_page_token:
            body["nextPageToken"] = next_page_token
        return self.request(SEARCH_PATH, method="POST", body=body) or {}

    def search_all(self, jql, fields, limit=DEFAULT_LIMIT, page_size=PAGE_SIZE):
        """Accumulate search pages until exhausted or `limit` issues are collected.

        Pages are requested one after another; the next page is only asked
        for when the previous one returned issues and a continuation token.

        Returns:
            (issues, more_available) — more_available is True if the last
            page carried a continuation token.
        """
        limit = max(1, int(limit))
        issues = []
        token = None
        more_available = False

        while len(issues) < limit:
            remaining = limit - len(issues)
            page = self.search(jql, fields, min(page_size, remaining), token)
            page_issues = page.get("issues") or []
            issues.extend(page_issues[:remaining])
            token = page.get("nextPageToken")
            more_available = bool(token)
            if not token or not page_issues:
                break

        return issues, more_available

    def field_lookup(self):
        """Return the FieldLookup for the site, fetching the catalog once."""
        if self._field_cache is None:
            catalog = self.request(FIELDS_PATH) or []
            self._field_cache = FieldLookup.from_catalog(catalog)
        return self._field_cache

    def get_issue(self, key):
        """Fetch a single issue with all fields."""
        path = ISSUE_PATH.format(key=urllib.parse.quote(key, safe=""))
        return self.request(path) or {}
