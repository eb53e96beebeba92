from clients.dealerscope_sdk.auth_client import AuthClient
from clients.dealerscope_sdk.config import SDKConfig
from clients.dealerscope_sdk.dashboard_client import DashboardClient
from clients.dealerscope_sdk.errors import ApiError
from clients.dealerscope_sdk.http_client import HttpClient
from clients.dealerscope_sdk.me_client import MeClient
from clients.dealerscope_sdk.scope_client import ScopeClient

__all__ = [
    "SDKConfig",
    "ApiError",
    "HttpClient",
    "AuthClient",
    "MeClient",
    "ScopeClient",
    "DashboardClient",
]
