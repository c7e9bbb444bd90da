from __future__ import annotations

from .supply_adapters import ADAPTER_REGISTRY, SUPPLY_ADAPTERS, get_adapter_class

__all__ = ["ADAPTER_REGISTRY", "SUPPLY_ADAPTERS", "get_adapter_class"]
