# ============================================================================
# SCOPE: GLOBAL
# Description: Dependencias FastAPI para inyección: contenedor, autenticación
#              por token Bearer, control de roles y de pertenencia.
# ============================================================================
import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.container import DependencyContainer, get_container
from app.core.domain import AuthenticationException, AuthorizationException
from app.domains.healthcare.domain.value_objects import UserRole
from app.services.token_service import TokenClaims

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# CONTAINER
# ============================================================


def get_di_container() -> DependencyContainer:
    """
    Get Dependency Injection Container.

    Returns:
        DependencyContainer instance
    """
    return get_container()


Container = Annotated[DependencyContainer, Depends(get_di_container)]


# ============================================================
# AUTHENTICATION
# ============================================================


async def get_current_user(
    container: Container,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenClaims:
    """
    Dependencia para obtener la identidad del token Bearer

    Returns:
        TokenClaims: email, rol e id de la cuenta
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationException("Se requiere autenticación")
    return container.base.get_token_service().get_claims(credentials.credentials)


CurrentUser = Annotated[TokenClaims, Depends(get_current_user)]


def require_roles(*roles: UserRole):
    """
    Dependencia para requerir uno de los roles indicados

    Args:
        roles: Roles aceptados
    """

    def dependency(user: CurrentUser) -> TokenClaims:
        if user.role not in roles:
            logger.info(f"{user.email} ({user.role.value}) denied, requires {[r.value for r in roles]}")
            raise AuthorizationException(operation="access", resource=", ".join(r.value for r in roles))
        return user

    return dependency


AdminUser = Annotated[TokenClaims, Depends(require_roles(UserRole.ADMIN))]
DoctorOrAdmin = Annotated[TokenClaims, Depends(require_roles(UserRole.DOCTOR, UserRole.ADMIN))]
PatientOrAdmin = Annotated[TokenClaims, Depends(require_roles(UserRole.PATIENT, UserRole.ADMIN))]


# ============================================================
# OWNERSHIP
# ============================================================


def ensure_owner_or_admin(user: TokenClaims, owner_id: UUID | None, resource: str) -> None:
    """
    Fail with 403 unless the caller is admin or owns the resource.

    Args:
        user: Current identity
        owner_id: Account id owning the resource
        resource: Resource name for the error message
    """
    if user.role == UserRole.ADMIN:
        return
    if user.account_id is None or user.account_id != owner_id:
        logger.info(f"{user.email} is not the owner of {resource}")
        raise AuthorizationException(operation="access", resource=resource, user_id=user.email)
