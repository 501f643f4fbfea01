"""Tests for the Location Tracking integration."""
