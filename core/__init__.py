"""
Core Package

Contains the exchange-agnostic pieces shared by the connectors:
- Configuration (pydantic-settings) and logging setup
- Schemas: Pydantic models for credentials, request descriptors and response envelopes
- Exceptions: TransportError / APIError taxonomy
"""
