from .auth_store import AuthStore

__all__ = ["AuthStore"]
