from typing import Any
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración de la aplicación utilizando Pydantic BaseSettings.
    Carga automáticamente las variables de entorno.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Citas Médicas API"
    PROJECT_DESCRIPTION: str = "API para la reserva de citas médicas entre pacientes y doctores"
    VERSION: str = "0.1.0"

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="Host de PostgreSQL")
    DB_PORT: int = Field(5432, description="Puerto de PostgreSQL")
    DB_NAME: str = Field("citas_medicas", description="Nombre de la base de datos")
    DB_USER: str = Field("postgres", description="Usuario de PostgreSQL")
    DB_PASSWORD: str | None = Field(None, description="Contraseña de PostgreSQL")
    DB_ECHO: bool = Field(False, description="Log SQL queries (solo para debug)")
    DATABASE_URL: str | None = Field(
        None, description="URL asíncrona completa de SQLAlchemy; reemplaza los campos DB_* si está definida"
    )
    DB_CREATE_TABLES: bool = Field(False, description="Crear tablas al iniciar (solo desarrollo)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(20, description="Tamaño del pool de conexiones")
    DB_MAX_OVERFLOW: int = Field(30, description="Máximo overflow del pool")
    DB_POOL_RECYCLE: int = Field(3600, description="Reciclar conexiones cada X segundos")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout para obtener conexión del pool")

    # Reintentos ante fallos de serialización (SQLSTATE 40001 / 40P01)
    DB_RETRY_MAX_ATTEMPTS: int = Field(3, description="Intentos máximos para transacciones reintentables")
    DB_RETRY_INITIAL_DELAY: float = Field(0.05, description="Espera inicial entre reintentos en segundos")

    # JWT Settings
    JWT_SECRET_KEY: str = Field(..., description="Clave secreta para JWT")
    JWT_ALGORITHM: str = Field("HS256", description="Algoritmo de firma de los tokens")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, description="Tiempo de expiración del token de acceso en minutos")
    BCRYPT_ROUNDS: int = Field(12, description="Costo de bcrypt para los hashes de contraseña")

    # Cuenta de administrador (no hay alta de administradores por API)
    ADMIN_EMAIL: str | None = Field(None, description="Email del administrador inicial")
    ADMIN_PASSWORD_HASH: str | None = Field(None, description="Hash bcrypt de la contraseña del administrador")

    # Booking policy
    CANCELLATION_WINDOW_HOURS: int = Field(24, description="Horas mínimas de antelación para cancelar una cita")

    # Notification Settings
    NOTIFICATION_CHANNEL: str = Field("email", description="Canal de notificación activo: email o sms")
    NOTIFICATION_TIMEOUT_SECONDS: float = Field(10.0, description="Timeout para el envío de notificaciones")
    SMTP_HOST: str | None = Field(None, description="Servidor SMTP (sin valor: sólo se registran los emails)")
    SMTP_PORT: int = Field(587, description="Puerto SMTP")
    SMTP_USER: str | None = Field(None, description="Usuario SMTP")
    SMTP_PASSWORD: str | None = Field(None, description="Contraseña SMTP")
    SMTP_FROM: str = Field("no-reply@citasmedicas.local", description="Remitente de los emails")
    SMTP_USE_TLS: bool = Field(True, description="Usar STARTTLS")
    TWILIO_ACCOUNT_SID: str | None = Field(None, description="Account SID de Twilio")
    TWILIO_AUTH_TOKEN: str | None = Field(None, description="Auth token de Twilio")
    TWILIO_FROM_NUMBER: str | None = Field(None, description="Número remitente de Twilio")
    TWILIO_API_BASE: str = Field("https://api.twilio.com/2010-04-01", description="URL base de la API de Twilio")

    # Reports
    REPORTS_DIR: str = Field("reports", description="Directorio donde se guardan los reportes CSV")

    # Application Settings
    DEBUG: bool = Field(False, description="Modo de depuración")
    ENVIRONMENT: str = Field("production", description="Entorno de ejecución")
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging")
    CORS_ORIGINS: str = Field("", description="Orígenes permitidos para CORS separados por coma (fuera de DEBUG)")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorar campos extras en lugar de generar un error
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("NOTIFICATION_CHANNEL")
    @classmethod
    def validate_notification_channel(cls, v):
        v = v.lower().strip()
        if v not in ("email", "sms"):
            raise ValueError("NOTIFICATION_CHANNEL must be 'email' or 'sms'")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @field_validator("DB_MAX_OVERFLOW")
    @classmethod
    def validate_max_overflow(cls, v):
        if v < 0:
            raise ValueError("DB_MAX_OVERFLOW must be 0 or greater")
        if v > 200:
            raise ValueError("DB_MAX_OVERFLOW should not exceed 200")
        return v

    @field_validator("DB_RETRY_MAX_ATTEMPTS", "CANCELLATION_WINDOW_HOURS")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @computed_field
    @property
    def async_database_url(self) -> str:
        """URL para el engine asíncrono (asyncpg), o DATABASE_URL si está definida"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            password = quote_plus(self.DB_PASSWORD)
            return f"postgresql+asyncpg://{user}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql+asyncpg://{user}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Lista de orígenes CORS configurados"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @computed_field
    @property
    def uses_sqlite(self) -> bool:
        """Indica si la base de datos configurada es SQLite (tests / desarrollo local)"""
        return self.async_database_url.startswith("sqlite")


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
