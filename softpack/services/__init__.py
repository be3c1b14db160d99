from .catalog_store import CatalogStore
from .admin_service import AdminService

__all__ = ["CatalogStore", "AdminService"]
