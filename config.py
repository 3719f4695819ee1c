## Setup  Put overrides in .env, restart the server. Example:
#RATE_LIMIT=30/minute
#CORS_ORIGINS=http://localhost:5500,https://my-frontend.example.com

import os

from dotenv import load_dotenv

load_dotenv()

PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

RATE_LIMIT = os.getenv("RATE_LIMIT", "60/minute")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in ("1", "true", "yes")

# ==== Upstream endpoints ====
FACEBOOK_GRAPH_API_BASE = os.getenv("FACEBOOK_GRAPH_API_BASE", "https://graph.facebook.com").rstrip("/")
INSTAGRAM_GRAPH_API_BASE = os.getenv("INSTAGRAM_GRAPH_API_BASE", "https://graph.instagram.com").rstrip("/")
INSTAGRAM_WEB_BASE = os.getenv("INSTAGRAM_WEB_BASE", "https://www.instagram.com").rstrip("/")
GRAPH_API_VERSION = os.getenv("GRAPH_API_VERSION", "v18.0")
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "20"))
# ============================
