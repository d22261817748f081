"""
Assets.

An asset is either the native asset or a credit asset identified by a code
and an issuer. The wire variant (4 or 12 byte code) is chosen by the code
length alone. Trust lines and change-trust operations extend the asset
union with liquidity pool shares.
"""

from __future__ import annotations
from typing import Optional

from .codec import XdrCodec, XdrReader, XdrWriter
from .crypto.keypair import PublicKey
from .errors import InvalidAssetCodeError, XdrError
from .liquidity_pool import LiquidityPoolConstantFeeParameters, LiquidityPoolId

ASSET_TYPE_NATIVE = 0
ASSET_TYPE_CREDIT_ALPHANUM4 = 1
ASSET_TYPE_CREDIT_ALPHANUM12 = 2
ASSET_TYPE_POOL_SHARE = 3


def asset_code_type(code: str) -> int:
    """
    Wire variant for a credit asset code.

    Raises:
        InvalidAssetCodeError: If the code is not 1-12 ASCII characters
    """
    if not isinstance(code, str) or not code.isascii() or "\x00" in code:
        raise InvalidAssetCodeError(details={"code": code})
    if 1 <= len(code) <= 4:
        return ASSET_TYPE_CREDIT_ALPHANUM4
    if 5 <= len(code) <= 12:
        return ASSET_TYPE_CREDIT_ALPHANUM12
    raise InvalidAssetCodeError(details={"code": code})


def code_width(asset_type: int) -> int:
    return 4 if asset_type == ASSET_TYPE_CREDIT_ALPHANUM4 else 12


def encode_asset_code(code: str) -> bytes:
    """Zero-pad the code to its 4 or 12 byte wire width."""
    width = code_width(asset_code_type(code))
    return code.encode("ascii").ljust(width, b"\x00")


def decode_asset_code(raw: bytes, asset_type: int) -> str:
    """
    Read a zero-padded code, the first zero byte terminates it.

    Raises:
        XdrError: If non-zero bytes follow the terminator or the length
            does not match the variant
        InvalidAssetCodeError: If the code is empty or not ASCII
    """
    code_bytes, _, rest = raw.partition(b"\x00")
    if any(rest):
        raise XdrError("asset code has bytes after the terminator")
    try:
        code = code_bytes.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidAssetCodeError(cause=e)
    if asset_code_type(code) != asset_type:
        raise XdrError(f"asset code {code!r} does not match asset type {asset_type}")
    return code


class CreditAsset:
    """A non-native asset: code plus issuer."""

    def __init__(self, code: str, issuer: PublicKey):
        self._asset_type = asset_code_type(code)
        self._code = code
        self._issuer = issuer

    @property
    def code(self) -> str:
        return self._code

    @property
    def issuer(self) -> PublicKey:
        return self._issuer

    @property
    def asset_type(self) -> int:
        return self._asset_type

    def write_xdr(self, writer: XdrWriter) -> None:
        """Write the alphanum body (code then issuer) without discriminant."""
        writer.opaque_fixed(encode_asset_code(self._code), code_width(self._asset_type))
        self._issuer.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader, asset_type: int) -> CreditAsset:
        code = decode_asset_code(reader.opaque_fixed(code_width(asset_type)), asset_type)
        issuer = PublicKey.read_xdr(reader)
        return cls(code, issuer)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CreditAsset):
            return False
        return self._code == other._code and self._issuer == other._issuer

    def __hash__(self) -> int:
        return hash((self._code, self._issuer))

    def __repr__(self) -> str:
        return f"CreditAsset('{self._code}', {self._issuer.account_id()})"


class Asset(XdrCodec):
    """Native asset or a credit asset."""

    def __init__(self, credit: Optional[CreditAsset] = None):
        self._credit = credit

    @classmethod
    def new_native(cls) -> Asset:
        return cls()

    @classmethod
    def new_credit(cls, code: str, issuer: PublicKey) -> Asset:
        return cls(CreditAsset(code, issuer))

    def is_native(self) -> bool:
        return self._credit is None

    def is_credit(self) -> bool:
        return self._credit is not None

    def as_credit(self) -> Optional[CreditAsset]:
        return self._credit

    @property
    def asset_type(self) -> int:
        return ASSET_TYPE_NATIVE if self._credit is None else self._credit.asset_type

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(self.asset_type)
        if self._credit is not None:
            self._credit.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Asset:
        asset_type = reader.int32()
        if asset_type == ASSET_TYPE_NATIVE:
            return cls.new_native()
        if asset_type in (ASSET_TYPE_CREDIT_ALPHANUM4, ASSET_TYPE_CREDIT_ALPHANUM12):
            return cls(CreditAsset.read_xdr(reader, asset_type))
        raise XdrError(f"unknown asset type: {asset_type}")

    def __eq__(self, other) -> bool:
        return isinstance(other, Asset) and self._credit == other._credit

    def __hash__(self) -> int:
        return hash(self._credit)

    def __repr__(self) -> str:
        if self._credit is None:
            return "Asset.new_native()"
        return f"Asset.new_credit('{self._credit.code}', {self._credit.issuer!r})"


class TrustLineAsset(XdrCodec):
    """Asset held by a trust line: native, credit, or a liquidity pool share."""

    def __init__(self, asset: Optional[Asset] = None, pool_id: Optional[LiquidityPoolId] = None):
        if (asset is None) == (pool_id is None):
            raise ValueError("exactly one of asset or pool_id is required")
        self._asset = asset
        self._pool_id = pool_id

    @classmethod
    def from_asset(cls, asset: Asset) -> TrustLineAsset:
        return cls(asset=asset)

    @classmethod
    def new_native(cls) -> TrustLineAsset:
        return cls(asset=Asset.new_native())

    @classmethod
    def new_credit(cls, code: str, issuer: PublicKey) -> TrustLineAsset:
        return cls(asset=Asset.new_credit(code, issuer))

    @classmethod
    def new_pool_share(cls, pool_id: LiquidityPoolId) -> TrustLineAsset:
        return cls(pool_id=pool_id)

    def is_pool_share(self) -> bool:
        return self._pool_id is not None

    def as_asset(self) -> Optional[Asset]:
        return self._asset

    def as_pool_share(self) -> Optional[LiquidityPoolId]:
        return self._pool_id

    def write_xdr(self, writer: XdrWriter) -> None:
        if self._pool_id is not None:
            writer.int32(ASSET_TYPE_POOL_SHARE)
            self._pool_id.write_xdr(writer)
        else:
            self._asset.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> TrustLineAsset:
        asset_type = reader.int32()
        if asset_type == ASSET_TYPE_POOL_SHARE:
            return cls(pool_id=LiquidityPoolId.read_xdr(reader))
        if asset_type == ASSET_TYPE_NATIVE:
            return cls.new_native()
        if asset_type in (ASSET_TYPE_CREDIT_ALPHANUM4, ASSET_TYPE_CREDIT_ALPHANUM12):
            return cls(asset=Asset(CreditAsset.read_xdr(reader, asset_type)))
        raise XdrError(f"unknown trust line asset type: {asset_type}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, TrustLineAsset):
            return False
        return self._asset == other._asset and self._pool_id == other._pool_id

    def __hash__(self) -> int:
        return hash((self._asset, self._pool_id))

    def __repr__(self) -> str:
        if self._pool_id is not None:
            return f"TrustLineAsset.new_pool_share({self._pool_id!r})"
        return f"TrustLineAsset.from_asset({self._asset!r})"


class ChangeTrustAsset(XdrCodec):
    """Line of a change-trust operation: an asset or liquidity pool parameters."""

    def __init__(self, asset: Optional[Asset] = None,
                 pool: Optional[LiquidityPoolConstantFeeParameters] = None):
        if (asset is None) == (pool is None):
            raise ValueError("exactly one of asset or pool is required")
        self._asset = asset
        self._pool = pool

    @classmethod
    def from_asset(cls, asset: Asset) -> ChangeTrustAsset:
        return cls(asset=asset)

    @classmethod
    def new_pool_share(cls, pool: LiquidityPoolConstantFeeParameters) -> ChangeTrustAsset:
        return cls(pool=pool)

    def is_pool_share(self) -> bool:
        return self._pool is not None

    def as_asset(self) -> Optional[Asset]:
        return self._asset

    def as_pool_share(self) -> Optional[LiquidityPoolConstantFeeParameters]:
        return self._pool

    def write_xdr(self, writer: XdrWriter) -> None:
        if self._pool is not None:
            writer.int32(ASSET_TYPE_POOL_SHARE)
            self._pool.write_xdr(writer)
        else:
            self._asset.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> ChangeTrustAsset:
        asset_type = reader.int32()
        if asset_type == ASSET_TYPE_POOL_SHARE:
            return cls(pool=LiquidityPoolConstantFeeParameters.read_xdr(reader))
        if asset_type == ASSET_TYPE_NATIVE:
            return cls(asset=Asset.new_native())
        if asset_type in (ASSET_TYPE_CREDIT_ALPHANUM4, ASSET_TYPE_CREDIT_ALPHANUM12):
            return cls(asset=Asset(CreditAsset.read_xdr(reader, asset_type)))
        raise XdrError(f"unknown change trust asset type: {asset_type}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChangeTrustAsset):
            return False
        return self._asset == other._asset and self._pool == other._pool

    def __hash__(self) -> int:
        return hash((self._asset, self._pool))

    def __repr__(self) -> str:
        if self._pool is not None:
            return f"ChangeTrustAsset.new_pool_share({self._pool!r})"
        return f"ChangeTrustAsset.from_asset({self._asset!r})"
