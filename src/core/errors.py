"""
Error taxonomy for fetching, clustering and persistence
"""
from typing import Optional


class FetchError(Exception):
    """
    A producer could not obtain a record. Never fatal.
    """

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url


class TransientNetworkError(FetchError):
    pass


class NonSuccessStatusError(FetchError):
    def __init__(self, url: str, status_code: int):
        super().__init__(url, f"returned status code: {status_code}")
        self.status_code = status_code


class RecordDecodeError(FetchError):
    pass


class DuplicateRecordError(ValueError):
    """
    A record with an already ingested identifier was offered again.
    """

    def __init__(self, num: int):
        super().__init__(f"record {num} was already ingested")
        self.num = num


class PersistenceError(Exception):
    """
    A cluster snapshot could not be written.
    """

    def __init__(self, cluster_key: int, cause: Optional[BaseException] = None):
        super().__init__(f"failed to save cluster {cluster_key}: {cause}")
        self.cluster_key = cluster_key
        self.cause = cause


class BootstrapError(Exception):
    """
    The output root cannot be used. Fatal.
    """
