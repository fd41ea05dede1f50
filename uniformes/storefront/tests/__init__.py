"""
Storefront tests.

- test_pricing.py: tier price resolver and per-request pricing context
- test_products_api.py: catalog endpoints, colour images and price list
"""
