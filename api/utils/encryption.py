"""
Encryption Utilities

Encryption/decryption for wallet secrets stored outside the process (.env,
secret managers). Uses AES-128-CBC + HMAC via Fernet with password-derived keys.
"""

import base64
import secrets

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


# Constants
KEY_DERIVATION_ITERATIONS = 480_000  # OWASP recommended minimum for PBKDF2-HMAC-SHA256
SALT_BYTES = 32  # 256 bits
ENCRYPTED_PREFIX = "encrypted:"


def generate_salt() -> str:
    """
    Generate a cryptographically secure random salt.

    Returns:
        Base64-encoded salt string
    """
    salt_bytes = secrets.token_bytes(SALT_BYTES)
    return base64.urlsafe_b64encode(salt_bytes).decode("utf-8")


def _derive_key_from_password(password: str, salt: str) -> bytes:
    """
    Derive an encryption key from a password using PBKDF2-HMAC-SHA256.

    Returns:
        32-byte encryption key, base64-encoded as Fernet expects
    """
    salt_bytes = base64.urlsafe_b64decode(salt.encode("utf-8"))

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt_bytes,
        iterations=KEY_DERIVATION_ITERATIONS,
    )
    key = kdf.derive(password.encode("utf-8"))
    return base64.urlsafe_b64encode(key)


def is_encrypted(value: str) -> bool:
    return value.startswith(ENCRYPTED_PREFIX)


def encrypt_secret(secret: str, password: str, salt: str | None = None) -> tuple[str, str]:
    """
    Encrypt a wallet secret (base58 private key) with a password.

    Args:
        secret: Secret to protect
        password: Password for encryption
        salt: Optional base64 salt; a new one is generated when omitted

    Returns:
        Tuple of (encrypted value with "encrypted:" prefix, salt)

    Raises:
        ValueError: If secret or password is empty

    Example:
        >>> encrypted, salt = encrypt_secret("4Nd1m...", "my_secure_password")
        >>> # WEB3_SOLANA_WALLET_PRIVATE_KEY=encrypted  SOLANA_WALLET_KEY_SALT=salt
    """
    if not secret or not secret.strip():
        raise ValueError("Secret cannot be empty")

    if not password or not password.strip():
        raise ValueError("Password cannot be empty")

    salt = salt or generate_salt()
    cipher = Fernet(_derive_key_from_password(password, salt))
    encrypted = cipher.encrypt(secret.encode("utf-8")).decode("utf-8")
    return f"{ENCRYPTED_PREFIX}{encrypted}", salt


def decrypt_secret(encrypted_secret: str, password: str, salt: str) -> str:
    """
    Decrypt a value produced by encrypt_secret.

    Raises:
        ValueError: If any parameter is empty, or the password is wrong / data corrupted
    """
    if not encrypted_secret or not encrypted_secret.strip():
        raise ValueError("Encrypted secret cannot be empty")

    if not password or not password.strip():
        raise ValueError("Password cannot be empty")

    if not salt or not salt.strip():
        raise ValueError("Salt cannot be empty")

    token = encrypted_secret[len(ENCRYPTED_PREFIX):] if is_encrypted(encrypted_secret) else encrypted_secret
    cipher = Fernet(_derive_key_from_password(password, salt))
    try:
        return cipher.decrypt(token.encode("utf-8")).decode("utf-8")
    except InvalidToken as e:
        raise ValueError("Invalid password or corrupted data") from e
