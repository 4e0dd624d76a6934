"""Application ports package."""

from .database import DatabaseEnginePort
from .group_repository import GroupSettlementRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "GroupSettlementRepositoryPort",
]
