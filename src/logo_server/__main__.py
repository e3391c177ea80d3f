# Este archivo permite ejecutar el servidor como módulo Python usando: python -m logo_server

"""
Entry point for running Logo Server as a Python module.

Usage:
    python -m logo_server [--port N] [--image-directory DIR] [--image-file-name NAME]
"""
import sys

from .server import main

if __name__ == "__main__":
    sys.exit(main())
