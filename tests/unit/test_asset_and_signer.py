"""
Tests for assets, trust line assets and signer keys.
"""

import pytest

from stellar_base import (
    Asset,
    ChangeTrustAsset,
    HashX,
    LiquidityPoolConstantFeeParameters,
    LiquidityPoolId,
    PreAuthTxHash,
    PublicKey,
    Signer,
    SignerKey,
    TrustLineAsset,
)
from stellar_base.asset import (
    ASSET_TYPE_CREDIT_ALPHANUM4,
    ASSET_TYPE_CREDIT_ALPHANUM12,
    asset_code_type,
    decode_asset_code,
    encode_asset_code,
)
from stellar_base.errors import InvalidAssetCodeError, InvalidHashXError, XdrError

ISSUER = "GCZHXL5HXQX5ABDM26LHYRCQZ5OJFHLOPLZX47WEBP3V2PF5AVFK2A5D"


@pytest.fixture
def issuer():
    return PublicKey.from_account_id(ISSUER)


class TestAsset:
    """Test asset encodings and code validation."""

    def test_native(self):
        asset = Asset.new_native()
        assert asset.is_native()
        assert asset.as_credit() is None
        assert asset.to_xdr_base64() == "AAAAAA=="

    def test_alphanum4(self, issuer):
        asset = Asset.new_credit("RUST", issuer)
        assert asset.asset_type == ASSET_TYPE_CREDIT_ALPHANUM4
        assert asset.to_xdr_base64() == "AAAAAVJVU1QAAAAAsnuvp7wv0ARs15Z8RFDPXJKdbnrzfn7EC/ddPL0FSq0="
        assert Asset.from_xdr_base64(asset.to_xdr_base64()) == asset

    def test_alphanum12(self, issuer):
        asset = Asset.new_credit("RUSTRUSTRUST", issuer)
        assert asset.asset_type == ASSET_TYPE_CREDIT_ALPHANUM12
        assert asset.to_xdr_base64() == (
            "AAAAAlJVU1RSVVNUUlVTVAAAAACye6+nvC/QBGzXlnxEUM9ckp1uevN+fsQL9108vQVKrQ=="
        )
        credit = Asset.from_xdr_base64(asset.to_xdr_base64()).as_credit()
        assert credit.code == "RUSTRUSTRUST"
        assert credit.issuer == issuer

    @pytest.mark.parametrize("code", ["", "ABCDEFGHIJKLM", "AB\x00C", "ÄBC"])
    def test_invalid_codes(self, code, issuer):
        with pytest.raises(InvalidAssetCodeError):
            Asset.new_credit(code, issuer)

    def test_code_widths(self):
        assert asset_code_type("A") == ASSET_TYPE_CREDIT_ALPHANUM4
        assert asset_code_type("ABCDE") == ASSET_TYPE_CREDIT_ALPHANUM12
        assert encode_asset_code("AB") == b"AB\x00\x00"

    def test_decode_rejects_bytes_after_terminator(self):
        with pytest.raises(XdrError):
            decode_asset_code(b"AB\x00C", ASSET_TYPE_CREDIT_ALPHANUM4)

    def test_decode_rejects_wrong_variant(self):
        with pytest.raises(XdrError):
            decode_asset_code(b"AB" + b"\x00" * 10, ASSET_TYPE_CREDIT_ALPHANUM12)

    def test_unknown_asset_type(self):
        with pytest.raises(XdrError):
            Asset.from_xdr_bytes(b"\x00\x00\x00\x07")


class TestTrustLineAssets:
    """Test the trust line and change trust asset unions."""

    def test_trust_line_asset_from_asset(self, issuer):
        asset = Asset.new_credit("RUST", issuer)
        line = TrustLineAsset.from_asset(asset)
        assert not line.is_pool_share()
        assert line.as_asset() == asset
        assert line.to_xdr_bytes() == asset.to_xdr_bytes()

    def test_trust_line_pool_share(self):
        pool_id = LiquidityPoolId(b"\x07" * 32)
        line = TrustLineAsset.new_pool_share(pool_id)
        assert line.is_pool_share()
        assert line.to_xdr_bytes() == b"\x00\x00\x00\x03" + b"\x07" * 32
        assert TrustLineAsset.from_xdr_bytes(line.to_xdr_bytes()) == line

    def test_change_trust_pool_share(self, issuer):
        params = LiquidityPoolConstantFeeParameters(Asset.new_native(), Asset.new_credit("RUST", issuer))
        asset = ChangeTrustAsset.new_pool_share(params)
        assert asset.as_pool_share().fee == 30
        assert ChangeTrustAsset.from_xdr_bytes(asset.to_xdr_bytes()) == asset


class TestSignerKey:
    """Test signer key kinds and their wire forms."""

    def test_ed25519(self):
        key = PublicKey.from_account_id("GCEE2MAVLB3D5J64TTHR3T4ZYK4BZJEYIPE7FMG4NAXHY3VQRHW55BNX")
        signer_key = SignerKey.new_ed25519(key)
        assert signer_key.to_xdr_base64() == "AAAAAIhNMBVYdj6n3JzPHc+ZwrgcpJhDyfKw3GgufG6wie3e"
        assert signer_key.as_ed25519() == key
        assert signer_key.as_hash_x() is None

    def test_hash_x_from_preimage(self):
        signer_key = SignerKey.new_from_preimage(b"hello")
        assert signer_key.to_xdr_base64() == "AAAAAizyTbpfsKMOJug7KsW54p4bFh5cH6dCXnMEM2KTi5gk"
        assert SignerKey.from_xdr_base64(signer_key.to_xdr_base64()) == signer_key

    def test_pre_auth_tx(self):
        hash = PreAuthTxHash(bytes(range(32)))
        signer_key = SignerKey.new_pre_auth_tx(hash)
        assert signer_key.key_type == 1
        assert PreAuthTxHash.from_strkey(hash.to_strkey()) == hash
        assert SignerKey.from_xdr_bytes(signer_key.to_xdr_bytes()).as_pre_auth_tx() == hash

    def test_signed_payload(self, issuer):
        signer_key = SignerKey.new_ed25519_signed_payload(issuer, b"payload")
        decoded = SignerKey.from_xdr_bytes(signer_key.to_xdr_bytes())
        assert decoded.as_ed25519_signed_payload().payload == b"payload"

    def test_hash_x_length(self):
        with pytest.raises(InvalidHashXError):
            HashX(b"\x00" * 31)

    def test_signer_weight(self, issuer):
        signer = Signer(SignerKey.new_ed25519(issuer), 5)
        data = signer.to_xdr_bytes()
        assert data[-4:] == b"\x00\x00\x00\x05"
        assert Signer.from_xdr_bytes(data) == signer

    def test_unknown_signer_key_type(self):
        with pytest.raises(XdrError):
            SignerKey.from_xdr_bytes(b"\x00\x00\x00\x09" + b"\x00" * 32)
