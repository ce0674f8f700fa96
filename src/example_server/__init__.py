# Este archivo marca el paquete example_server y expone la versión del proyecto.

"""
Example Server - trivial HTTP server for exercising container deployment
and health-check behaviour (boot delays, S3 and EFS access, crash on start).
"""

__version__ = "0.1.0"
__description__ = "Example HTTP server for container orchestration deployment tests"

# Expose main components for easier imports
from .server import main, serve, create_server

__all__ = ["main", "serve", "create_server", "__version__"]
