"""Access token validation (FastAPI dependency)."""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader, APIKeyQuery

from src.errors import AuthError, StoreError
from src.seo.models import Tenant
from src.store.redis import PageStore

_access_query = APIKeyQuery(name="accessId", auto_error=False)
_access_header = APIKeyHeader(name="X-Access-Token", auto_error=False)


def get_store(request: Request) -> PageStore:
    return request.app.state.store


async def resolve_tenant(store: PageStore, token: str | None) -> Tenant:
    """Map an access token to its tenant.

    Raises:
        AuthError: the token is missing or unknown.
    """
    if not token:
        raise AuthError("access token is required")
    tenant = await store.find_tenant(token)
    if tenant is None:
        raise AuthError("invalid access token")
    return tenant


async def require_tenant(
    query_token: str | None = Security(_access_query),
    header_token: str | None = Security(_access_header),
    store: PageStore = Depends(get_store),
) -> Tenant:
    """Resolve the ``accessId`` query parameter or ``X-Access-Token`` header to a tenant."""
    try:
        return await resolve_tenant(store, query_token or header_token)
    except AuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token",
        ) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Page store unavailable",
        ) from exc
