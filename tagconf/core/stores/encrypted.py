"""
Properties store with encrypted values.

Values written as ``ENC(token)`` are Fernet tokens. The Fernet key is
derived from a password with PBKDF2-HMAC-SHA256, and the password itself is
read from the environment variable named by ``password_property`` unless it
is passed in directly.
"""

import base64
import os
from typing import Mapping, Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..base.exceptions import ConfigurationError
from ..base.types import Entry
from ..config.settings import get_settings
from .properties import PropertiesStore


_SALT = b'tagconf-encrypted-properties'
_ITERATIONS = 100000


def _get_cipher(password: str) -> Fernet:
    """Create a Fernet cipher from a password string."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=_SALT,
        iterations=_ITERATIONS,
    )
    derived_key = base64.urlsafe_b64encode(kdf.derive(password.encode('utf-8')))
    return Fernet(derived_key)


def encrypt_value(plaintext: str, password: str) -> str:
    """Encrypt a value for use in an encrypted properties file.

    Parameters
    ----------
    plaintext : str
        Value to protect
    password : str
        Password the store will be given

    Returns
    -------
    str
        ``ENC(token)`` string
    """
    settings = get_settings()
    token = _get_cipher(password).encrypt(plaintext.encode('utf-8')).decode('ascii')
    return f"{settings.encrypted_prefix}{token}{settings.encrypted_suffix}"


class EncryptedPropertiesStore(PropertiesStore):
    """Properties store that decrypts ``ENC(...)`` values.

    Parameters
    ----------
    password_property : str
        Name of the environment variable holding the password
    password : str, optional
        Password to use instead of reading the environment
    environ : Mapping[str, str], optional
        Mapping to read the password from instead of ``os.environ``
    """

    def __init__(self, password_property: str, password: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None, encoding: Optional[str] = None):
        super().__init__(encoding=encoding)
        self.password_property = password_property
        self._password = password
        self._environ = environ
        self._cipher: Optional[Fernet] = None

    def _cipher_for_load(self) -> Fernet:
        if self._cipher is None:
            environ = os.environ if self._environ is None else self._environ
            password = self._password if self._password is not None else environ.get(self.password_property)
            if not password:
                raise ConfigurationError(
                    f"No password found for encrypted properties in '{self.password_property}'",
                    parameter=self.password_property,
                )
            self._cipher = _get_cipher(password)
        return self._cipher

    def _make_entry(self, key: str, value: str) -> Entry:
        entry = super()._make_entry(key, value)
        settings = get_settings()
        prefix, suffix = settings.encrypted_prefix, settings.encrypted_suffix

        if not (value.startswith(prefix) and value.endswith(suffix) and len(value) >= len(prefix) + len(suffix)):
            return entry

        token = value[len(prefix):len(value) - len(suffix)]
        try:
            plaintext = self._cipher_for_load().decrypt(token.encode('ascii')).decode('utf-8')
        except (InvalidToken, UnicodeError) as e:
            raise ConfigurationError(
                f"Cannot decrypt value of '{entry.key}'", parameter=entry.key, cause=e,
            ) from e

        return Entry(entry.key, plaintext, entry.tag)
