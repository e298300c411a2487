"""
WAQI client package root.

Modules:
- waqi: World Air Quality Index CLI (search + station feed)
"""
