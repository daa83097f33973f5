"""Entry point for ``python -m src.deploy``."""

from .cli import console_entrypoint

if __name__ == "__main__":
    console_entrypoint()
