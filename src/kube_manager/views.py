"""
Display projections of Kubernetes API objects.

Every function here is pure: it reads a client model object (V1Node, V1Pod,
...) plus the evaluation time and returns display values. Nothing touches the
network and source objects are never modified.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass
from datetime import datetime, timedelta
from typing import Iterable, Mapping, Optional

from .config import CONTROL_PLANE_ROLE_VALUES, UNKNOWN_AGE, UNKNOWN_STATUS, WORKER_ROLE

_HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class NodeView:
    name: str
    status: str
    roles: str
    age: str


@dataclass(frozen=True)
class PodView:
    name: str
    ready: str
    status: str
    age: str


@dataclass(frozen=True)
class DeploymentView:
    name: str
    ready: str
    up_to_date: int
    available: int
    age: str


@dataclass(frozen=True)
class ServiceView:
    name: str
    type: str
    cluster_ip: str
    ports: str


@dataclass(frozen=True)
class NamespaceView:
    name: str
    status: str


def view_row(view) -> tuple[str, ...]:
    """Return the view's fields as display strings, in column order."""
    return tuple(str(value) for value in astuple(view))


def format_duration(seconds: int) -> str:
    """
    Format whole seconds the way Go prints a time.Duration.

    >>> format_duration(3 * 3600)
    '3h0m0s'
    >>> format_duration(0)
    '0s'
    """
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


def format_age(created: Optional[datetime], now: datetime) -> str:
    """
    Age of a resource, rounded to the nearest hour.

    Half hours round up. A creation time after ``now`` (clock skew between
    client and API server) is treated as age zero.

    Args:
        created: metadata.creationTimestamp (timezone-aware), or None.
        now: Evaluation instant, timezone-aware.

    Returns:
        Go-style duration such as "3h0m0s", or "<unknown>" without a timestamp.
    """
    if created is None:
        return UNKNOWN_AGE
    elapsed = max(now - created, timedelta(0))
    hours = (elapsed + _HOUR / 2) // _HOUR
    return format_duration(hours * 3600)


def node_roles(labels: Optional[Mapping[str, str]]) -> str:
    """
    Role string for a node's labels.

    Every label whose *value* is "master" or "control-plane" contributes its
    key followed by a comma; with no match the node is a "worker".
    """
    # NOTE: kubeadm marks roles with the label *key* (node-role.kubernetes.io/<role>)
    # and an empty value, so this rule likely misses real control-plane nodes.
    # Kept as-is until the intended rule is confirmed.
    roles = "".join(
        f"{key}," for key, value in (labels or {}).items() if value in CONTROL_PLANE_ROLE_VALUES
    )
    return roles or WORKER_ROLE


def latest_condition(conditions) -> str:
    """Type of the last entry in the node's condition list (by position)."""
    # The Ready condition is not necessarily last; position is what is shown.
    if not conditions:
        return UNKNOWN_STATUS
    return conditions[-1].type


def ready_containers(statuses) -> int:
    return sum(1 for status in statuses or () if status.ready)


def pod_ready(pod) -> str:
    """Ready ratio as "ready/total"; total counts the containers in the pod spec."""
    total = len(pod.spec.containers or ()) if pod.spec else 0
    statuses = pod.status.container_statuses if pod.status else None
    return f"{ready_containers(statuses)}/{total}"


def port_summary(ports: Optional[Iterable]) -> str:
    return ",".join(f"{port.port}/{port.protocol}" for port in ports or ())


def node_view(node, now: datetime) -> NodeView:
    meta = node.metadata
    conditions = node.status.conditions if node.status else None
    return NodeView(
        name=meta.name,
        status=latest_condition(conditions),
        roles=node_roles(meta.labels),
        age=format_age(meta.creation_timestamp, now),
    )


def pod_view(pod, now: datetime) -> PodView:
    phase = pod.status.phase if pod.status else None
    return PodView(
        name=pod.metadata.name,
        ready=pod_ready(pod),
        status=phase or "",
        age=format_age(pod.metadata.creation_timestamp, now),
    )


def deployment_view(deployment, now: datetime) -> DeploymentView:
    """
    Project a deployment using the counts its status reports.

    READY is readyReplicas/replicas straight from status; unset counts
    (e.g. a deployment scaled to zero) show as 0.
    """
    status = deployment.status
    replicas = (status.replicas if status else None) or 0
    ready = (status.ready_replicas if status else None) or 0
    return DeploymentView(
        name=deployment.metadata.name,
        ready=f"{ready}/{replicas}",
        up_to_date=(status.updated_replicas if status else None) or 0,
        available=(status.available_replicas if status else None) or 0,
        age=format_age(deployment.metadata.creation_timestamp, now),
    )


def service_view(service, now: Optional[datetime] = None) -> ServiceView:
    spec = service.spec
    return ServiceView(
        name=service.metadata.name,
        type=(spec.type if spec else None) or "",
        cluster_ip=(spec.cluster_ip if spec else None) or "",
        ports=port_summary(spec.ports if spec else None),
    )


def namespace_view(namespace, now: Optional[datetime] = None) -> NamespaceView:
    phase = namespace.status.phase if namespace.status else None
    return NamespaceView(name=namespace.metadata.name, status=phase or "")
