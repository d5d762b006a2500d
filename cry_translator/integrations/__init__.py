"""Platform integrations.

    from cry_translator.integrations.server import create_app
"""

from cry_translator.integrations.server import create_app

__all__ = ["create_app"]
