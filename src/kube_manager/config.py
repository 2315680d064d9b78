"""
Constants, table layouts and kubeconfig resolution for kube-manager.

Column widths match the fixed-width tables printed by each verb; the
kubeconfig path is taken from --kubeconfig / $KUBECONFIG or defaults to
~/.kube/config.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

DEFAULT_NAMESPACE = "default"

# Lines returned by `logs` unless --tail is given.
DEFAULT_TAIL_LINES = 100

KUBECONFIG_ENV = "KUBECONFIG"
REQUEST_TIMEOUT_ENV = "KUBE_MANAGER_REQUEST_TIMEOUT"

# Label values that mark a node as part of the control plane.
CONTROL_PLANE_ROLE_VALUES = frozenset({"master", "control-plane"})
WORKER_ROLE = "worker"

UNKNOWN_AGE = "<unknown>"
UNKNOWN_STATUS = "Unknown"

# (header, width) per column; cells are left-aligned and joined by one space.
NODE_COLUMNS = (("NAME", 20), ("STATUS", 15), ("ROLES", 20), ("AGE", 15))
POD_COLUMNS = (("NAME", 30), ("READY", 15), ("STATUS", 10), ("AGE", 15))
DEPLOYMENT_COLUMNS = (
    ("NAME", 25),
    ("READY", 10),
    ("UP-TO-DATE", 15),
    ("AVAILABLE", 15),
    ("AGE", 15),
)
SERVICE_COLUMNS = (("NAME", 25), ("TYPE", 20), ("CLUSTER-IP", 15), ("PORT(S)", 15))
NAMESPACE_COLUMNS = (("NAME", 20), ("STATUS", 15))

SEPARATOR = "-" * 64


def default_kubeconfig() -> str:
    """Return ~/.kube/config for the invoking user."""
    return str(Path.home() / ".kube" / "config")


def resolve_kubeconfig(explicit: Optional[str]) -> str:
    """
    Pick the kubeconfig path to load.

    Args:
        explicit: Value of --kubeconfig (click fills it from $KUBECONFIG when
            the flag is absent). Empty strings count as unset.

    Returns:
        The explicit path when given, otherwise ~/.kube/config.
    """
    if explicit:
        return explicit
    return default_kubeconfig()
