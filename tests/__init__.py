"""Tests for geoselect."""
