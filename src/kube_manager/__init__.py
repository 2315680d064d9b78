"""
kube_manager: List and scale Kubernetes resources from the command line.

Talks to the cluster API through the official client and prints nodes,
pods, deployments, services and namespaces as fixed-width tables, scales
deployments, and tails pod logs.
"""

__version__ = "0.1.0"
