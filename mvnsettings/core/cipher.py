"""
Maven password cipher.

Functions compatible with the Plexus PBE cipher used by ``mvn --encrypt-password``
and ``mvn --encrypt-master-password``.

Encrypted values are base64 of ``salt[8] | pad_len[1] | ciphertext | padding``.
Key and IV come from SHA-256 over the passphrase and salt; the payload is
AES-128-CBC with PKCS#7 padding. Decorated values wrap the base64 in braces.
"""

import base64
import re
import secrets

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..utils.exceptions import CipherError

# Passphrase protecting the master password in settings-security.xml
SETTINGS_SECURITY_PASSPHRASE = "settings.security"

ENCRYPTED_STRING_PATTERN = re.compile(r".*?[^\\]?\{(.*?[^\\])\}.*")

SALT_SIZE = 8
CHUNK_SIZE = 16
SPICE_SIZE = 16


def is_encrypted_string(value: str | None) -> bool:
    """Whether the whole of ``value`` matches the brace-decorated form."""
    if not value:
        return False
    return ENCRYPTED_STRING_PATTERN.fullmatch(value) is not None


def decorate(value: str) -> str:
    return "{" + value + "}"


def undecorate(value: str) -> str:
    """Return the text between the braces of a decorated value."""
    match = ENCRYPTED_STRING_PATTERN.fullmatch(value)
    if match is None:
        raise CipherError("Value is not a decorated encrypted string")
    return match.group(1)


def _derive_key_and_iv(passphrase: str, salt: bytes) -> tuple[bytes, bytes]:
    password = passphrase.encode("utf-8")
    key_and_iv = b""
    previous = b""

    while len(key_and_iv) < 2 * SPICE_SIZE:
        digest = hashes.Hash(hashes.SHA256())
        digest.update(previous)
        digest.update(password)
        digest.update(salt[:SALT_SIZE])
        previous = digest.finalize()
        key_and_iv += previous

    return key_and_iv[:SPICE_SIZE], key_and_iv[SPICE_SIZE : 2 * SPICE_SIZE]


def _cipher(passphrase: str, salt: bytes) -> Cipher:
    key, iv = _derive_key_and_iv(passphrase, salt)
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def encrypt(clear_text: str, passphrase: str) -> str:
    """Encrypt ``clear_text`` into an undecorated base64 token."""
    salt = secrets.token_bytes(SALT_SIZE)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(clear_text.encode("utf-8")) + padder.finalize()
    encryptor = _cipher(passphrase, salt).encryptor()
    encrypted = encryptor.update(padded) + encryptor.finalize()

    pad_len = CHUNK_SIZE - (SALT_SIZE + len(encrypted) + 1) % CHUNK_SIZE
    payload = salt + bytes([pad_len]) + encrypted + bytes(pad_len)
    return base64.b64encode(payload).decode("ascii")


def encrypt_and_decorate(clear_text: str, passphrase: str) -> str:
    return decorate(encrypt(clear_text, passphrase))


def decrypt(encrypted_text: str, passphrase: str) -> str:
    """
    Decrypt an undecorated base64 token.

    Raises:
        CipherError: if the token is malformed or the passphrase is wrong
    """
    try:
        payload = base64.b64decode(encrypted_text)
        salt = payload[:SALT_SIZE]
        pad_len = payload[SALT_SIZE]
        encrypted_length = len(payload) - SALT_SIZE - 1 - pad_len
        if len(salt) < SALT_SIZE or encrypted_length <= 0:
            raise ValueError(f"encrypted payload too short ({len(payload)} bytes)")
        encrypted = payload[SALT_SIZE + 1 : SALT_SIZE + 1 + encrypted_length]

        decryptor = _cipher(passphrase, salt).decryptor()
        padded = decryptor.update(encrypted) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        clear = unpadder.update(padded) + unpadder.finalize()
        return clear.decode("utf-8")
    except (ValueError, IndexError) as e:
        raise CipherError(f"Unable to decrypt value: {e}") from e


def decrypt_decorated(value: str, passphrase: str) -> str:
    """Decrypt a value that may or may not be wrapped in braces."""
    if not value:
        return value
    if is_encrypted_string(value):
        return decrypt(undecorate(value), passphrase)
    return decrypt(value, passphrase)
