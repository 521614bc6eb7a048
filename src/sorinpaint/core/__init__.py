"""Configuration and pipeline orchestration."""
