"""Top-level package for geoipmap.

geoipmap places geo-located IP addresses (and traceroute hops) on a world
map image. The package is split into:

- ``domain``: coordinates, geo-locations and typed errors
- ``ports``: protocols the core depends on
- ``mapping``: the projection pipeline (image regions, calibration, zoom)
- ``adapters``: geo-IP providers, caching, projections, renderers, tracing
- ``services``: orchestration used by the command line
"""

__version__ = "0.1.0"
