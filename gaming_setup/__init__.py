"""Gaming setup for Pop!_OS / Ubuntu desktops (single pass, availability-gated).

Core design goals:
- Never attempt to install a package the package index does not know
- Idempotent steps; re-running the whole tool is the recovery path
- Skipping is expected and reported, never fatal
- Centralized logging
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
