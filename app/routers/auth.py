"""
Authentication router — Google OAuth sign-in + JWT cookie.

Endpoints:
    GET  /auth/login/{provider}    → redirect to OAuth consent screen
    GET  /auth/callback/{provider} → handle OAuth callback, find or create member
    GET  /auth/session             → current session state
    GET  /auth/logout              → clear JWT cookie
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from authlib.integrations.starlette_client import OAuth
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from jose import JWTError, jwt

from app.config import settings
from app.dependencies import get_database_service
from app.exceptions import RecordNotFound
from app.models.user import MemberStatusEnum, RoleEnum, TeamMember
from app.schemas.user import MemberOut, SessionOut
from app.services.database_service import DatabaseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

COOKIE_KEY = "access_token"

# ═══════════════════════════════════════════════════════════════
#  OAuth client setup
# ═══════════════════════════════════════════════════════════════

oauth = OAuth()

# ── Google ──
oauth.register(
    name="google",
    client_id=settings.GOOGLE_CLIENT_ID,
    client_secret=settings.GOOGLE_CLIENT_SECRET,
    server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
    client_kwargs={"scope": "openid email profile"},
)

VALID_PROVIDERS = {"google"}


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════

def create_access_token(data: dict) -> str:
    """Create a signed JWT with an expiry claim."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _set_auth_cookie(response: RedirectResponse, member_id: int) -> RedirectResponse:
    """Attach the JWT cookie to a response."""
    token = create_access_token({"sub": str(member_id)})
    response.set_cookie(
        key=COOKIE_KEY,
        value=token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
    )
    return response


async def get_current_user(
    request: Request,
    db: DatabaseService = Depends(get_database_service),
) -> Optional[TeamMember]:
    """
    Extract the JWT from the cookie, decode it, and return the TeamMember.
    Returns None when no valid token is present or the member was removed.
    """
    token = request.cookies.get(COOKIE_KEY)
    if not token:
        return None
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        member_id: int = int(payload.get("sub", 0))
        if not member_id:
            return None
    except (JWTError, ValueError):
        return None

    try:
        member = await db.get_member(member_id)
    except RecordNotFound:
        return None
    if member.status == MemberStatusEnum.REMOVED:
        return None
    return member


async def require_user(
    current_user: Optional[TeamMember] = Depends(get_current_user),
) -> TeamMember:
    if not current_user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return current_user


async def require_founder(current_user: TeamMember = Depends(require_user)) -> TeamMember:
    if current_user.role != RoleEnum.FOUNDER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only founders can do this.")
    return current_user


async def find_or_create_member(
    db: DatabaseService, user_id: str, email: Optional[str], name: Optional[str]
) -> TeamMember:
    """Return the member for an external auth id, creating it on first login."""
    member = await db.get_user_by_user_id(user_id)
    if member:
        return member

    role = RoleEnum.FOUNDER if user_id == settings.FOUNDER_USER_ID else RoleEnum.MEMBER
    logger.info(f"First login for {user_id}, creating {role.value} record")
    return await db.create_user(
        user_id=user_id,
        email=email or "",
        name=name or "",
        role=role,
    )


# ═══════════════════════════════════════════════════════════════
#  OAuth flow
# ═══════════════════════════════════════════════════════════════

@router.get("/login/{provider}")
async def oauth_login(provider: str, request: Request):
    """Redirect the user to the provider's OAuth consent screen."""
    if provider not in VALID_PROVIDERS:
        raise HTTPException(status_code=400, detail=f"Unknown provider: {provider}")

    client = oauth.create_client(provider)
    redirect_uri = request.url_for("oauth_callback", provider=provider)
    return await client.authorize_redirect(request, str(redirect_uri))


@router.get("/callback/{provider}")
async def oauth_callback(
    provider: str,
    request: Request,
    db: DatabaseService = Depends(get_database_service),
):
    """Handle the OAuth callback — find or create the member, set JWT cookie."""
    if provider not in VALID_PROVIDERS:
        raise HTTPException(status_code=400, detail=f"Unknown provider: {provider}")

    try:
        client = oauth.create_client(provider)
        token = await client.authorize_access_token(request)
    except Exception as e:
        logger.warning(f"OAuth callback failed: {e}")
        raise HTTPException(status_code=400, detail=f"Authentication failed: {e}")

    userinfo = token.get("userinfo") or {}
    oauth_id = userinfo.get("sub")
    if not oauth_id:
        raise HTTPException(status_code=400, detail="Could not retrieve your identity from the provider.")

    member = await find_or_create_member(db, oauth_id, userinfo.get("email"), userinfo.get("name"))
    if member.status == MemberStatusEnum.REMOVED:
        raise HTTPException(status_code=403, detail="This account has been removed from the team.")

    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    return _set_auth_cookie(response, member.id)


@router.get("/session", response_model=SessionOut)
async def session_state(current_user: Optional[TeamMember] = Depends(get_current_user)):
    """Report whether the caller is signed in, and as whom."""
    if not current_user:
        return SessionOut(authenticated=False)
    return SessionOut(authenticated=True, user=MemberOut.model_validate(current_user))


# ═══════════════════════════════════════════════════════════════
#  Logout
# ═══════════════════════════════════════════════════════════════

@router.get("/logout")
async def logout():
    """Clear the auth cookie and redirect to the landing page."""
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(key=COOKIE_KEY)
    return response
