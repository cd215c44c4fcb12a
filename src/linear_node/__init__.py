"""Linear connector for workflow automation runtimes."""

from .connectors.linear import LinearNode, check_credentials, create_node

__version__ = "0.1.0"

__all__ = ["LinearNode", "check_credentials", "create_node"]
