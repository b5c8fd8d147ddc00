"""
Handles the encoding and decoding of database IDs into fixed-length,
non-sequential and reversible digit codes. The parameters come from the
environment, so every process sharing that configuration agrees on codes.
"""
from functools import lru_cache

from config import config
from obfuscation import Obfuscator


@lru_cache()
def get_obfuscator() -> Obfuscator:
    """
    Returns a cached, singleton instance of the Obfuscator.
    Call get_obfuscator.cache_clear() after changing the configuration.
    """
    return Obfuscator(**config.obfuscator_params())


def encode_id(n: int) -> str:
    """Encodes a single integer ID into a non-sequential digit code."""
    return get_obfuscator().encode(n)


def decode_id(s: str) -> int:
    """Decodes a digit code back into an integer ID."""
    return get_obfuscator().decode(s)
