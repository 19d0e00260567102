"""
Interfaces base para repositorios (Data Access Layer)

Estos protocols definen contratos que deben implementar todos los repositorios
del sistema, siguiendo el patrón Repository y Dependency Inversion Principle.
"""

from abc import abstractmethod
from typing import Generic, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")  # Entity type
ID = TypeVar("ID")  # ID type (int, str, UUID, etc.)


@runtime_checkable
class IRepository(Protocol, Generic[T, ID]):
    """
    Interface base para todos los repositorios.

    Implementa el patrón Repository para abstraer el acceso a datos.

    Type Parameters:
        T: Tipo de entidad que maneja el repositorio
        ID: Tipo de identificador de la entidad

    Example:
        ```python
        class SQLAlchemySpecialtyRepository(IRepository[Specialty, UUID]):
            async def find_by_id(self, id: UUID) -> Optional[Specialty]:
                # Implementation using SQLAlchemy
                ...
        ```
    """

    @abstractmethod
    async def find_by_id(self, id: ID) -> Optional[T]:
        """
        Encuentra una entidad por su ID.

        Args:
            id: Identificador único de la entidad

        Returns:
            Entidad encontrada o None si no existe
        """
        ...

    @abstractmethod
    async def exists(self, id: ID) -> bool:
        """
        Verifica si existe una entidad con el ID dado.

        Args:
            id: Identificador a verificar

        Returns:
            True si existe, False en caso contrario
        """
        ...
