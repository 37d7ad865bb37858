"""jiri — a minimal command-line client for Jira Cloud.

Modules (stdlib + certifi):
    jiri.argv       — Argument splitting and flag parsing
    jiri.commands   — Command tree, dispatch, and help text
    jiri.fields     — Field-name resolution, suggestions, value normalization
    jiri.formatter  — Bordered / plain / CSV table rendering
    jiri.client     — Jira REST API client (Basic auth)
    jiri.config     — Credentials from the environment
    jiri.cli        — `jiri` entry point
"""

__version__ = "0.1.0"
