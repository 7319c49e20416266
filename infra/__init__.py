"""
Infrastructure module exports.

Configuration and bootstrap for all service backends.
"""

from .config import InfraConfig, get_config, AgentBackendType
from .bootstrap import Services, bootstrap_services

__all__ = [
    "InfraConfig",
    "get_config",
    "AgentBackendType",
    "Services",
    "bootstrap_services",
]
