from sdk.pystore import StoreClient, StoreClientError

__all__ = ["StoreClient", "StoreClientError"]
