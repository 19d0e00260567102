from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import bcrypt
from jose import JWTError, jwt

from app.config.settings import Settings, get_settings
from app.core.domain.exceptions import AuthenticationException
from app.domains.healthcare.domain.value_objects.user_role import UserRole


@dataclass(frozen=True)
class TokenClaims:
    """Identidad extraída de un token válido"""

    email: str
    role: UserRole
    account_id: UUID | None = None


class TokenService:
    """
    Servicio para gestionar tokens JWT y hashes de contraseña
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

        # Configuración JWT
        self.SECRET_KEY = self.settings.JWT_SECRET_KEY
        self.ALGORITHM = self.settings.JWT_ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.BCRYPT_ROUNDS = self.settings.BCRYPT_ROUNDS

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verifica si la contraseña coincide con el hash"""
        if not hashed_password:
            return False
        # Convertir contraseña y hash a bytes
        password_bytes = plain_password.encode("utf-8")
        hash_bytes = hashed_password.encode("utf-8")
        try:
            return bcrypt.checkpw(password_bytes, hash_bytes)
        except ValueError:
            # Hash con formato inválido
            return False

    def get_password_hash(self, password: str) -> str:
        """Genera un hash para la contraseña"""
        # Convertir contraseña a bytes
        password_bytes = password.encode("utf-8")
        # Generar salt y hash
        salt = bcrypt.gensalt(rounds=self.BCRYPT_ROUNDS)
        hash_bytes = bcrypt.hashpw(password_bytes, salt)
        # Convertir hash de bytes a string
        return hash_bytes.decode("utf-8")

    def create_access_token(
        self,
        email: str,
        role: UserRole,
        account_id: UUID | None = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Crea un token JWT de acceso

        Args:
            email: Email de la cuenta (claim ``sub``)
            role: Rol de la cuenta
            account_id: ID del paciente o doctor (None para el administrador)
            expires_delta: Tiempo de expiración (opcional)

        Returns:
            Token JWT codificado
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES))

        to_encode: Dict[str, Any] = {
            "sub": email,
            "role": role.value,
            "exp": expire,
            "iat": now,
            "token_type": "access",
        }
        if account_id is not None:
            to_encode["uid"] = str(account_id)

        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Decodifica un token JWT

        Args:
            token: Token JWT a decodificar

        Returns:
            Datos del token decodificado
        """
        try:
            return jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError as e:
            raise AuthenticationException(f"Token inválido: {str(e)}") from e

    def get_claims(self, token: str) -> TokenClaims:
        """
        Obtiene la identidad a partir del token

        Args:
            token: Token JWT

        Returns:
            Claims validados
        """
        payload = self.decode_token(token)
        email = payload.get("sub")
        if not email or payload.get("token_type") != "access":
            raise AuthenticationException("Token inválido")
        try:
            role = UserRole(payload.get("role"))
            account_id = UUID(payload["uid"]) if payload.get("uid") else None
        except ValueError as e:
            raise AuthenticationException("Token inválido") from e
        return TokenClaims(email=email, role=role, account_id=account_id)
