# =============================================================================
# app/auth/ - Authentication
# =============================================================================
# - routes.py: /api/auth collection (register, login, me, verify)
# - dependencies.py: Bearer token verification against Supabase Auth
# - models.py: AuthUser and the sign-up / sign-in bodies
#
# Protected handlers take the caller as a dependency:
#
#   @router.post("")
#   def create_topic(user: AuthUser = Depends(get_current_user)):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

__all__ = ["AuthUser", "get_current_user"]
