"""
Custom exceptions for the memory_match package.
"""

class MemoryMatchException(Exception):
    """Base exception for the package."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ConfigurationError(MemoryMatchException):
    """Raised when coordinator configuration cannot be built from its inputs."""
    pass
