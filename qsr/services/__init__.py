"""Storefront services: money helpers, catalog repository, menu images."""
