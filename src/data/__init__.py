"""Collaborators supplying base rates and pool state to the rate engine."""

from src.data.provider_factory import create_provider

__all__ = ["create_provider"]
