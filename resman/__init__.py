"""resman: resource reconciliation cache for Kubernetes-style operators."""

__version__ = "0.1.0"
