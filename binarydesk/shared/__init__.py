"""
Shared Kernel
==============
Configuración y logging compartidos por todas las capas.
"""

from binarydesk.shared.config.settings import Settings, settings
from binarydesk.shared.logging.logger import setup_logging, get_logger

__all__ = ["Settings", "settings", "setup_logging", "get_logger"]
