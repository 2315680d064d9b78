"""Exceptions raised by the cluster client and reported by the CLI."""

from typing import Optional


class KubeManagerError(Exception):
    pass


class ClusterConfigError(KubeManagerError):
    """
    Raised when the kubeconfig cannot be loaded or the client cannot be built.
    """
    pass


class ClusterAPIError(KubeManagerError):
    """
    Raised when a single request to the cluster API fails.

    ``status`` is the HTTP status code, or None for transport failures
    (connection refused, timeouts).
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
