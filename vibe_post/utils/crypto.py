from abc import ABC, abstractmethod
import base64
import os
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from ..config import ENCRYPTION_KEY_BYTES
from .logger import get_logger

logger = get_logger(__name__)

IV_LENGTH = 16


class TokenCipher(ABC):
    """Symmetric encryption of access tokens before they are persisted."""

    @abstractmethod
    def encrypt(self, text: str) -> str:
        """Encrypt a token for storage."""
        pass

    @abstractmethod
    def decrypt(self, encrypted: str) -> str:
        """Decrypt a stored token."""
        pass


class AESTokenCipher(TokenCipher):
    """
    AES-256-CBC with PKCS7 padding and a fresh 16-byte IV per call.

    Stored format is ``base64(iv) + ":" + base64(ciphertext)``.
    """

    def __init__(self, key: str):
        key_bytes = key.encode("utf-8")
        if len(key_bytes) != ENCRYPTION_KEY_BYTES:
            raise ValueError(f"Encryption key must be {ENCRYPTION_KEY_BYTES} bytes, got {len(key_bytes)}")
        self._key = key_bytes

    def encrypt(self, text: str) -> str:
        """Encrypt string data."""
        if not isinstance(text, str):
            raise ValueError(f"Data must be string, got {type(text)}")

        iv = os.urandom(IV_LENGTH)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(text.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return base64.b64encode(iv).decode() + ":" + base64.b64encode(ciphertext).decode()

    def decrypt(self, encrypted: str) -> str:
        """Decrypt encrypted string."""
        try:
            iv_part, _, ciphertext_part = encrypted.partition(":")
            if not ciphertext_part:
                raise ValueError("Encrypted token must have the form iv:ciphertext")

            iv = base64.b64decode(iv_part)
            if len(iv) != IV_LENGTH:
                raise ValueError(f"Invalid IV length: {len(iv)} bytes. Expected {IV_LENGTH} bytes.")
            ciphertext = base64.b64decode(ciphertext_part)

            decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()

            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")

        except Exception as e:
            logger.error(f"Decryption error: {str(e)}")
            raise
