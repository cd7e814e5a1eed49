from .settings import AdatSettings

__all__ = ["AdatSettings"]
