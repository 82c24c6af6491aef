"""
노선 그래프 / Dijkstra 최단 경로 / 요금 계산
"""

from app.algorithms.graph import Connection, SubwayGraph
from app.algorithms.graph_builder import GraphBuilder
from app.algorithms.path_finder import PathFinder
from app.algorithms.fare_calculator import FareCalculator, FareSchedule

__all__ = [
    "Connection",
    "SubwayGraph",
    "GraphBuilder",
    "PathFinder",
    "FareCalculator",
    "FareSchedule",
]
