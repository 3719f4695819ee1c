from fastapi import APIRouter

from routes.auth import OAUTH_SCOPES

router = APIRouter(prefix="/api", tags=["setup"])

# ==== EDIT HERE if the Facebook app onboarding changes ====
SETUP_INSTRUCTIONS = {
    "step1": "Create a Facebook App at https://developers.facebook.com/",
    "step2": "Add Instagram Basic Display product to your app",
    "step3": "Configure OAuth redirect URIs",
    "step4": "Get your App ID and App Secret",
    "step5": "Use /api/auth/instagram to get authorization URL",
    "step6": "Exchange authorization code for access token",
    "step7": "Use access token with /api/instagram/business/{username}",
}

LIMITATIONS = {
    "business_accounts_only": "Only Instagram Business/Creator accounts work with Graph API",
    "public_scraping_deprecated": "Public profile scraping is no longer reliable",
    "rate_limits": "Graph API has rate limits - check Facebook documentation",
}
# ===========================================================


@router.get("/setup")
def setup():
    return {
        "setup_instructions": SETUP_INSTRUCTIONS,
        "required_permissions": list(OAUTH_SCOPES),
        "limitations": LIMITATIONS,
    }
