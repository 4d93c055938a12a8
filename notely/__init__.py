"""Notely: multi-tenant notes API with plan quotas."""

__version__ = "0.1.0"
