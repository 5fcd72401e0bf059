"""Projection adapters - Implementations of ProjectionPort.

Available implementations:
- PyprojProjection: any PROJ definition on a unit sphere
- MillerCylindricalProjection, RobinsonProjection: the world map presets
"""

from .pyproj_adapter import MillerCylindricalProjection, PyprojProjection, RobinsonProjection

__all__ = ["PyprojProjection", "MillerCylindricalProjection", "RobinsonProjection"]
