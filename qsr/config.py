"""
Runtime configuration read from the environment.

Values are resolved once at import; tests override them with
``patch.dict("os.environ", ...)`` before the lazy clients are created.
"""
import os

# Supabase (restaurants, menu_items, storage)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
MENU_IMAGES_BUCKET = os.environ.get("MENU_IMAGES_BUCKET", "menu-images")

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Browsing session lifetime for the cart slot (seconds)
CART_SESSION_TTL = int(os.environ.get("CART_SESSION_TTL", "86400"))
SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "qsr_session")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
