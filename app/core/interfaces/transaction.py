"""
Interface para unidades de trabajo transaccionales

Los casos de uso declaran qué pasos deben ejecutarse de forma atómica sin
conocer el motor de persistencia.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

SERIALIZABLE = "SERIALIZABLE"


@runtime_checkable
class ITransactionManager(Protocol):
    """
    Ejecuta una unidad de trabajo dentro de una transacción.

    Example:
        ```python
        appointment = await tx.run(_book, operation="book_appointment", isolation_level=SERIALIZABLE)
        ```
    """

    async def run(
        self,
        work: Callable[[], Awaitable[T]],
        *,
        operation: str,
        isolation_level: str | None = SERIALIZABLE,
        retry: bool = False,
    ) -> T:
        """
        Ejecuta ``work`` en una transacción nueva y la confirma.

        Args:
            work: Corrutina sin argumentos con los pasos atómicos
            operation: Nombre de la operación (logs y errores)
            isolation_level: Nivel de aislamiento, None para el del motor
            retry: Reintentar ante fallos de serialización

        Returns:
            Resultado de ``work``

        Raises:
            ConcurrencyException: La transacción perdió una carrera de serialización
        """
        ...
