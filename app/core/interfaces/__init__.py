"""
Core interfaces (protocols) shared by the domain packages.
"""

from app.core.interfaces.repository import IRepository
from app.core.interfaces.transaction import SERIALIZABLE, ITransactionManager

__all__ = [
    "IRepository",
    "ITransactionManager",
    "SERIALIZABLE",
]
