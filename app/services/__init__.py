"""
Business logic services
"""

from app.services.pathfinding_service import PathfindingService
from app.services.topology_service import TopologyService
from app.services.favorite_service import FavoriteService

__all__ = [
    "PathfindingService",
    "TopologyService",
    "FavoriteService",
]
