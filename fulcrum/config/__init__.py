"""Configuration module for the Fulcrum client."""
from .settings import FulcrumConfig, load_settings

__all__ = ["FulcrumConfig", "load_settings"]
