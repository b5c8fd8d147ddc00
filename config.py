import os
from typing import Any, Dict, Optional

from obfuscation import (
    DEFAULT_KEY, DEFAULT_LENGTH, DEFAULT_MULTIPLIER, DEFAULT_SALT,
    ConfigurationError, Obfuscator,
)

# ============================================================================
# CONFIGURATION CLASS
# ============================================================================

class Config:
    """Centralized configuration with validation"""
    # Obfuscator secrets. Encoder and decoder must share all of them.
    OBFUSCATOR_SALT: str = os.getenv("OBFUSCATOR_SALT", str(DEFAULT_SALT))
    OBFUSCATOR_KEY: str = os.getenv("OBFUSCATOR_KEY", str(DEFAULT_KEY))
    OBFUSCATOR_LENGTH: str = os.getenv("OBFUSCATOR_LENGTH", str(DEFAULT_LENGTH))
    OBFUSCATOR_MULTIPLIER: str = os.getenv("OBFUSCATOR_MULTIPLIER", str(DEFAULT_MULTIPLIER))
    OBFUSCATOR_MULTIPLIER_INVERSE: Optional[str] = os.getenv("OBFUSCATOR_MULTIPLIER_INVERSE") or None

    # Rate limiting
    RATE_LIMIT_ENCODE: str = os.getenv("RATE_LIMIT_ENCODE", "60/minute")
    RATE_LIMIT_DECODE: str = os.getenv("RATE_LIMIT_DECODE", "60/minute")

    # Batch encoding
    MAX_BATCH_SIZE: int = 100

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: Optional[str] = os.getenv("LOG_DIR") or None

    @classmethod
    def obfuscator_params(cls) -> Dict[str, Any]:
        """Keyword arguments for building the process-wide Obfuscator"""
        return {
            "salt": cls.OBFUSCATOR_SALT,
            "key": cls.OBFUSCATOR_KEY,
            "length": cls.OBFUSCATOR_LENGTH,
            "multiplier": cls.OBFUSCATOR_MULTIPLIER,
            "multiplier_inverse": cls.OBFUSCATOR_MULTIPLIER_INVERSE,
        }

    @classmethod
    def validate(cls):
        """Validate configuration on startup"""
        if not cls.RATE_LIMIT_ENCODE or not cls.RATE_LIMIT_DECODE:
            raise ValueError("RATE_LIMIT_ENCODE and RATE_LIMIT_DECODE must be set")
        if cls.MAX_BATCH_SIZE < 1:
            raise ValueError("MAX_BATCH_SIZE must be positive")
        try:
            Obfuscator(**cls.obfuscator_params())
        except ConfigurationError as e:
            raise ValueError(f"Invalid obfuscator configuration: {e}") from e

# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

config = Config()

# --- Expose class attributes as module constants for convenience ---
for attr in [a for a in dir(config) if not a.startswith('__') and not callable(getattr(config, a))]:
    globals()[attr] = getattr(config, attr)
