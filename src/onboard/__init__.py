"""Onboard - account registration and identity linking.

Creates local accounts, links identity provider accounts to local ones and
resolves their language and timezone.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
