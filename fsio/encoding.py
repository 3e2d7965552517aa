"""Make Firestore-native values JSON serializable."""
import base64
from datetime import datetime

from google.cloud import firestore


def encode_value(value):
    """``default=`` hook for :func:`json.dump`."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, firestore.GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, firestore.DocumentReference):
        return value.path
    if isinstance(value, bytes):
        return base64.standard_b64encode(value).decode("ascii")
    raise TypeError(
        f"Object of type {type(value).__name__} is not JSON serializable")
