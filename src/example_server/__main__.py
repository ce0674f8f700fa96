# Este archivo permite ejecutar el servidor como módulo Python usando: python -m example_server

"""
Entry point for running the example server as a Python module.

Usage:
    python -m example_server
"""

from .server import main

if __name__ == "__main__":
    main()
