from typing import Optional, Any

class CoolShotError(Exception):
    """
    Base exception for the Cool Shot bot.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class AccessDeniedError(CoolShotError):
    """
    Raised when a user invokes a command above their access level.
    The message is the reply sent back to the user.
    """
    def __init__(self, message: str = "⛔️ *Access Denied* - Admins only!", details: Optional[Any] = None):
        super().__init__(message, code="ACCESS_DENIED", status_code=403, details=details)

class UsageError(CoolShotError):
    """
    Raised when command arguments are missing or malformed.
    The message is the usage hint sent back to the user.
    """
    def __init__(self, message: str = "Invalid command usage", details: Optional[Any] = None):
        super().__init__(message, code="USAGE_ERROR", status_code=422, details=details)

class ProviderError(CoolShotError):
    """
    Raised when a single AI provider call fails or returns nothing usable.
    """
    def __init__(self, message: str = "AI provider error", details: Optional[Any] = None):
        super().__init__(message, code="PROVIDER_ERROR", status_code=502, details=details)

class StorageError(CoolShotError):
    """
    Raised when a JSON document cannot be read or written.
    """
    def __init__(self, message: str = "Storage error", details: Optional[Any] = None):
        super().__init__(message, code="STORAGE_ERROR", status_code=500, details=details)
