"""
Solana Signing Account

Wraps the sender keypair so that key material is never printed, copied or
pickled, and can be released as soon as signing is done.
"""

import json
from typing import Optional

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .errors import ValidationError


class SigningAccount:
    """Keypair holder for a single transfer operation"""

    __slots__ = ("_keypair", "_pubkey")

    def __init__(self, keypair: Keypair):
        self._keypair: Optional[Keypair] = keypair
        self._pubkey = keypair.pubkey()

    @classmethod
    def from_secret(cls, material: bytes) -> "SigningAccount":
        """
        Build an account from stored secret material

        Accepted formats:
            - base58 string of the 64-byte keypair (wallet export format)
            - JSON array of 64 integers (solana-keygen file format)
            - 64 raw keypair bytes or a 32 byte seed

        Raises:
            ValidationError: If the material cannot be decoded into a keypair
        """
        try:
            if len(material) in (32, 64) and not _is_text(material):
                raw = bytes(material)
            else:
                text = bytes(material).decode("utf-8").strip()
                if text.startswith("["):
                    raw = bytes(json.loads(text))
                else:
                    raw = base58.b58decode(text)
            if len(raw) == 32:
                return cls(Keypair.from_seed(raw))
            return cls(Keypair.from_bytes(raw))
        except (TypeError, ValueError):
            # the secret must not end up in the message or the chained traceback
            raise ValidationError("Secret material is not a valid Solana keypair") from None

    @property
    def pubkey(self) -> Pubkey:
        return self._pubkey

    @property
    def address(self) -> str:
        return str(self._pubkey)

    @property
    def keypair(self) -> Keypair:
        """Keypair for signing; unavailable once the account is released"""
        if self._keypair is None:
            raise ValidationError(f"Signing account {self.address} has been released")
        return self._keypair

    def release(self) -> None:
        self._keypair = None

    def __enter__(self) -> "SigningAccount":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"SigningAccount(address={self.address})"

    __str__ = __repr__

    def __copy__(self):
        raise TypeError("SigningAccount cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("SigningAccount cannot be copied")

    def __reduce__(self):
        raise TypeError("SigningAccount cannot be pickled")


def _is_text(material: bytes) -> bool:
    try:
        text = bytes(material).decode("ascii")
    except UnicodeDecodeError:
        return False
    return text.isprintable()
