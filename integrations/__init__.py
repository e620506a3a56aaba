"""
External API clients.

Akeneo (source catalog) and Shopify (target store).
"""
