# Este archivo marca el paquete logo_server y expone la versión del proyecto.

"""
Logo Server - single-route HTTP server for a static image.

Answers GET / with the configured image file and nothing else.
"""

__version__ = "0.1.0"
__description__ = "Single-route HTTP server that serves one static image"

# Expose main components for easier imports
from .server import ServerState, StaticImageServer, main

__all__ = ["ServerState", "StaticImageServer", "main", "__version__"]
