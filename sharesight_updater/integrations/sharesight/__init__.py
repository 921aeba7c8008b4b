from .auth import authenticate
from .client import SharesightClient

__all__ = ["SharesightClient", "authenticate"]
