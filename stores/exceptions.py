"""
Shared exception definitions for the stores.

Hierarchy:
- StoreError (base for all store exceptions)
  - RoomNotFound / PlayerNotFound (lookups that found nothing)
  - UnexpectedResult (states that should be unreachable)
  - RoomStoreError (room-store specific errors)
    - RoomCodeExhausted
"""


# =========================
# Base exception
# =========================

class StoreError(Exception):
    """Base exception for all store-related errors."""
    retryable: bool = True


class RoomNotFound(StoreError):
    retryable = False


class PlayerNotFound(StoreError):
    retryable = False


class UnexpectedResult(StoreError):
    retryable = True
    # e.g. an integrity error the schema and locking should have made impossible


# =========================
# RoomStore exceptions
# =========================

class RoomStoreError(StoreError):
    """Base exception for room store errors."""
    retryable = True


class RoomCodeExhausted(RoomStoreError):
    # every generated code collided with an existing room
    retryable = True
