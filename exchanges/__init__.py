"""
Exchange Connectors Package

Each exchange has its own subfolder with:
- api_client.py: REST client and request dispatcher
- endpoints.py: Declarative endpoint table
- signing.py: Request authentication helpers
"""
