"""Tests for the turbopuffer vector store adapter.

The remote service is replaced by ``httpx.MockTransport`` handlers, so the
suite runs without network access or credentials.
"""
