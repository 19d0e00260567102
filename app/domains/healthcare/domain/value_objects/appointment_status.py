"""Appointment Status Value Object.

Defines the possible states of a medical appointment and their valid transitions.
"""

from app.core.domain.value_objects import StatusEnum


class AppointmentStatus(StatusEnum):
    """Estados de la cita médica con máquina de estados."""

    CONFIRMED = "CONFIRMED"  # Reservada y confirmada
    CANCELLED = "CANCELLED"  # Cancelada por el paciente o el doctor
    COMPLETED = "COMPLETED"  # Atendida

    @property
    def display_name(self) -> str:
        """Nombre para mostrar en español."""
        names = {
            "CONFIRMED": "Confirmada",
            "CANCELLED": "Cancelada",
            "COMPLETED": "Finalizada",
        }
        return names.get(self.value, self.value)

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Validar si la transición de estado es válida.

        State machine:
        - CONFIRMED -> CANCELLED, COMPLETED
        - CANCELLED -> (final state)
        - COMPLETED -> (final state)
        """
        transitions: dict[str, list[str]] = {
            "CONFIRMED": ["CANCELLED", "COMPLETED"],
            "CANCELLED": [],  # Estado final
            "COMPLETED": [],  # Estado final
        }
        return new_status.value in transitions.get(self.value, [])

    def is_final(self) -> bool:
        """¿Es un estado final (no permite más transiciones)?"""
        return self.value in ["CANCELLED", "COMPLETED"]

    def allows_cancellation(self) -> bool:
        """¿Se puede cancelar desde este estado?"""
        return self.can_transition_to(AppointmentStatus.CANCELLED)
