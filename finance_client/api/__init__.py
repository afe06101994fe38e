from finance_client.api.client import ApiClient
from finance_client.api.finance import FinanceApi

__all__ = ["ApiClient", "FinanceApi"]
