"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Geo-IP services (FreeGeoIP, IPInfoDB, MaxMind)
- Cache persistence (JSON file, in-memory, null)
- Map projections (pyproj)
- Rendering engines (Pillow, Folium)
- Path tracing tools (traceroute, tracepath)
"""
