import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from app.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Configuración
settings = get_settings()


def create_async_database_engine(config: Settings | None = None) -> AsyncEngine:
    """Crea el engine de base de datos asíncrono"""
    config = config or settings
    try:
        database_url = config.async_database_url

        # Configuración base común
        base_config = {
            "echo": config.DB_ECHO,
            "pool_pre_ping": True,
        }

        if config.uses_sqlite:
            # SQLite (tests / desarrollo local): sin pooling y con espera ante bloqueos
            logger.info("Creating async database engine for SQLite (NullPool)")
            engine_config = {
                **base_config,
                "poolclass": NullPool,
                "connect_args": {"timeout": 30},
            }
        elif config.DEBUG:
            # Para desarrollo: usar NullPool (sin pooling)
            logger.info("Creating async database engine for DEVELOPMENT (NullPool)")
            engine_config = {
                **base_config,
                "poolclass": NullPool,
            }
        else:
            # Para producción: usar pool completo
            logger.info("Creating async database engine for PRODUCTION (AsyncAdaptedQueuePool)")
            engine_config = {
                **base_config,
                "poolclass": AsyncAdaptedQueuePool,
                "pool_size": config.DB_POOL_SIZE,
                "max_overflow": config.DB_MAX_OVERFLOW,
                "pool_recycle": config.DB_POOL_RECYCLE,
                "pool_timeout": config.DB_POOL_TIMEOUT,
            }

        return create_async_engine(database_url, **engine_config)

    except Exception as e:
        logger.error(f"Failed to create async database engine: {e}")
        raise


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session maker con la configuración común de la aplicación"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Crear el engine asíncrono
async_engine = create_async_database_engine()

# Session maker asíncrono
AsyncSessionLocal = create_session_factory(async_engine)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency para obtener la sesión de base de datos asíncrona
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise


@asynccontextmanager
async def get_async_db_context():
    """
    Context manager para operaciones de base de datos asíncronas
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Crea todas las tablas registradas en Base.metadata (solo desarrollo / tests)."""
    from app.models.db.base import Base
    import app.domains.healthcare.infrastructure.persistence.sqlalchemy.models  # noqa: F401

    async with (engine or async_engine).begin() as conn:
        logger.info("Creando tablas...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Tablas creadas exitosamente")


async def dispose_engine() -> None:
    """Cierra las conexiones del pool."""
    await async_engine.dispose()
    logger.info("Async database engine disposed")
