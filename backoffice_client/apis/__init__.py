from .entities_api import EntitiesApi
from .branches_api import BranchesApi
from .menu_api import MenuApi
from .orders_api import OrdersApi
from .users_api import UsersApi
from .reports_api import ReportsApi

__all__ = ["EntitiesApi", "BranchesApi", "MenuApi", "OrdersApi", "UsersApi", "ReportsApi"]
