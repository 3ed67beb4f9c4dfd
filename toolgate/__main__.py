"""Entry point for running toolgate as a module.

This allows running the application with:
    python -m toolgate [OPTIONS]
"""

from toolgate.cli import app

if __name__ == "__main__":
    app()
