from .firebase import get_firebase_app

__all__ = ["get_firebase_app"]
