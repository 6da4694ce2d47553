"""HTTP API package for sigsync (optional).

Install with `pip install 'sigsync[api]'` to use the FastAPI server.
"""

from sigsync.api.app import create_app

__all__ = ["create_app"]
