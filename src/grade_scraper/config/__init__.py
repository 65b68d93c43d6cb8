from .settings import AuthCredentials, Settings, settings

__all__ = ["AuthCredentials", "Settings", "settings"]
