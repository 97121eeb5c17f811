"""Common utilities shared by the vector store adapter.

Includes:
- ``config``: pydantic-settings configuration (API key, endpoint, logging).
- ``logging``: structured logging setup with structlog.

Import pattern:
- from tpuf_store.common.config import TurbopufferConfig
- from tpuf_store.common.logging import configure_logging
"""
