"""Fulcrum REST API client package.

To use the API services:
    from fulcrum.core.api import FulcrumClient, FormService, RecordService

To load configuration from the environment:
    from fulcrum.config import load_settings
"""
# Note: the CLI lives in scripts/fulcrum_cli.py and is not imported here

__version__ = "0.9.1"
