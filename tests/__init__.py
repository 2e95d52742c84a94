"""
Test Suite

Contains unit tests for the KuCoin client.

Structure:
- tests/unit/: Tests for individual components (signing, endpoints, dispatcher, config)

Uses pytest with pytest-asyncio for testing async functionality.
"""
