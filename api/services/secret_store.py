"""
Secret Store

Resolves wallet key material by name from the process environment (populated
from .env). Values stored with the "encrypted:" prefix are decrypted with the
configured password and salt.
"""

import logging
import os
from collections.abc import Mapping

from pydantic import SecretStr

from api.utils.encryption import decrypt_secret, is_encrypted


logger = logging.getLogger(__name__)


class SecretNotFoundError(Exception):
    """No secret is stored under the requested name"""
    pass


class SecretStore:
    """Environment backed key material lookup"""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        password: SecretStr | None = None,
        salt: str | None = None,
    ):
        self.environ = environ if environ is not None else os.environ
        self.password = password
        self.salt = salt

    def get_private_key_material(self, key_name: str) -> bytes:
        """
        Get the encoded private key stored under key_name

        Args:
            key_name: Environment variable name (lookup is case-insensitive)

        Returns:
            Encoded secret bytes (base58 or JSON array), decoded by SigningAccount

        Raises:
            SecretNotFoundError: Nothing stored under key_name
            ValueError: Encrypted value without password/salt, or wrong password
        """
        value = self._lookup(key_name)
        if value is None:
            raise SecretNotFoundError(f"Secret {key_name} is not configured")

        secret = SecretStr(value.strip())
        if is_encrypted(secret.get_secret_value()):
            if self.password is None or not self.salt:
                raise ValueError(f"Secret {key_name} is encrypted but no password/salt is configured")
            logger.debug(f"Decrypting secret {key_name}")
            secret = SecretStr(
                decrypt_secret(secret.get_secret_value(), self.password.get_secret_value(), self.salt)
            )

        return secret.get_secret_value().encode("utf-8")

    def _lookup(self, key_name: str) -> str | None:
        if key_name in self.environ:
            return self.environ[key_name]
        wanted = key_name.lower()
        for name, value in self.environ.items():
            if name.lower() == wanted:
                return value
        return None
