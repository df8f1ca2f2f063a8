"""
vegadmin – admin dashboard support library for the vegan-checker database.

Import path convention::

    from vegadmin.application.search import SearchPaginationController
    from vegadmin.adapters.supabase import SupabaseRpcClient, ingredient_search
    from vegadmin.config import AdminSettings, EnvSettingsLoader
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
