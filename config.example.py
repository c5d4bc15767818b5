# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Put them in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "WATCHER_APP_NAME": "App display name (default: status-watcher).",
    "WATCHER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "WATCHER_DATA_DIR": "Local data directory for watcher.log (default: .local/status-watcher).",
    # Notion
    "WATCHER_NOTION_API_KEY": "Notion integration token (fallback: NOTION_KEY). Required.",
    "WATCHER_NOTION_DATABASE_ID": "Database to watch (fallback: NOTION_DATABASE_ID). Required for watch.",
    "WATCHER_NOTION_PAGE_ID": "Parent page for create-database (fallback: NOTION_PAGE_ID).",
    "WATCHER_NOTION_TIMEOUT_SECONDS": "Per-request timeout for the Notion client (default: 60).",
    # Watched properties
    "WATCHER_STATUS_PROPERTY": "Select property read as the task status (default: Date).",
    "WATCHER_TITLE_PROPERTY": "Title property read as the task title (default: Name).",
    # Poller
    "WATCHER_POLL_INTERVAL_SECONDS": "Seconds between poll cycles (default: 10).",
}
