"""
Network passphrases and ids.

The network id (sha256 of the passphrase) prefixes every signature payload,
so a transaction signed for one network is not valid on another.
"""

from __future__ import annotations
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .codec import sha256_bytes
from .errors import InvalidNetworkIdError

PUBLIC_NETWORK_PASSPHRASE = "Public Global Stellar Network ; September 2015"
TEST_NETWORK_PASSPHRASE = "Test SDF Network ; September 2015"


class Network:
    """A network identified by its passphrase."""

    def __init__(self, passphrase: str):
        if not isinstance(passphrase, str) or not passphrase:
            raise InvalidNetworkIdError("network passphrase must be a non-empty string")
        self._passphrase = passphrase
        self._network_id = sha256_bytes(passphrase.encode("utf-8"))

    @classmethod
    def new_public(cls) -> Network:
        return cls(PUBLIC_NETWORK_PASSPHRASE)

    @classmethod
    def new_test(cls) -> Network:
        return cls(TEST_NETWORK_PASSPHRASE)

    @property
    def passphrase(self) -> str:
        return self._passphrase

    def network_id(self) -> bytes:
        return self._network_id

    def __eq__(self, other) -> bool:
        return isinstance(other, Network) and self._passphrase == other._passphrase

    def __hash__(self) -> int:
        return hash(self._passphrase)

    def __repr__(self) -> str:
        return f"Network('{self._passphrase}')"

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Accept a passphrase string or a Network instance."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any) -> Network:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except InvalidNetworkIdError as e:
                raise ValueError(str(e))
        raise ValueError(f"cannot convert {type(value).__name__} to Network")
