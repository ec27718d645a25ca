"""Test fixture package for geoselect.

Contains fixtures for:
- Scheduler, viewport and geocoding provider doubles
"""
