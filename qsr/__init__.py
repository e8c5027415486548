"""
QSR Storefront Core

- availability: restaurant opening-window evaluation
- cart: session-scoped cart state machine
- db: Supabase and Upstash Redis clients
- services: catalog repository, storefront facade, menu images
- routers: FastAPI endpoints for the storefront
"""
