"""Manifest loading and pipeline orchestration."""
