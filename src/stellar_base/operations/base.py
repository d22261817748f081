"""
Operation base class and operation builder.

Every operation is a frozen pydantic model carrying an optional source
account plus the fields of its kind. On the wire an operation is the
optional source account, the int32 operation type and the type-specific
body; decoding dispatches on the type through the operation registry.

Builders collect fields through chainable ``with_*`` setters and validate
them all at once in ``build()``. A builder can be built only once.
"""

from __future__ import annotations
import logging
from enum import IntEnum
from typing import Any, ClassVar, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict

from ..codec import XdrCodec, XdrReader, XdrWriter
from ..crypto.keypair import PublicKey
from ..crypto.muxed import MuxedAccount, MuxedAccountLike, to_muxed_account
from ..errors import BuilderConsumedError, InvalidOperationError, InvalidPublicKeyError, XdrError

logger = logging.getLogger(__name__)


class OperationType(IntEnum):
    CREATE_ACCOUNT = 0
    PAYMENT = 1
    PATH_PAYMENT_STRICT_RECEIVE = 2
    MANAGE_SELL_OFFER = 3
    CREATE_PASSIVE_SELL_OFFER = 4
    SET_OPTIONS = 5
    CHANGE_TRUST = 6
    ALLOW_TRUST = 7
    ACCOUNT_MERGE = 8
    INFLATION = 9
    MANAGE_DATA = 10
    BUMP_SEQUENCE = 11
    MANAGE_BUY_OFFER = 12
    PATH_PAYMENT_STRICT_SEND = 13
    CREATE_CLAIMABLE_BALANCE = 14
    CLAIM_CLAIMABLE_BALANCE = 15
    BEGIN_SPONSORING_FUTURE_RESERVES = 16
    END_SPONSORING_FUTURE_RESERVES = 17
    REVOKE_SPONSORSHIP = 18
    CLAWBACK = 19
    CLAWBACK_CLAIMABLE_BALANCE = 20
    SET_TRUST_LINE_FLAGS = 21
    LIQUIDITY_POOL_DEPOSIT = 22
    LIQUIDITY_POOL_WITHDRAW = 23


def to_public_key(value: Any) -> PublicKey:
    """Accept a PublicKey or a 'G...' account id."""
    if isinstance(value, PublicKey):
        return value
    if isinstance(value, str):
        return PublicKey.from_account_id(value)
    raise InvalidPublicKeyError(f"cannot convert {type(value).__name__} to PublicKey")


class Operation(BaseModel, XdrCodec):
    """Base class of all operations."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type_code: ClassVar[OperationType]

    source_account: Optional[MuxedAccount] = None

    def write_body(self, writer: XdrWriter) -> None:
        """Write the type-specific body."""
        raise NotImplementedError

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> Operation:
        raise NotImplementedError

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.optional(self.source_account, lambda s: s.write_xdr(writer))
        writer.int32(int(self.type_code))
        self.write_body(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Operation:
        from .registry import lookup_operation

        source_account = reader.optional(lambda: MuxedAccount.read_xdr(reader))
        raw_type = reader.int32()
        op_cls = lookup_operation(raw_type)
        if op_cls is None:
            raise XdrError(f"unknown operation type: {raw_type}")
        op = op_cls.read_body(reader, source_account)
        if not isinstance(op, cls):
            raise XdrError(f"expected {cls.__name__}, got {op_cls.__name__}")
        return op

    # Builders, one per operation kind.

    @staticmethod
    def new_create_account():
        return _builder(OperationType.CREATE_ACCOUNT)

    @staticmethod
    def new_payment():
        return _builder(OperationType.PAYMENT)

    @staticmethod
    def new_path_payment_strict_receive():
        return _builder(OperationType.PATH_PAYMENT_STRICT_RECEIVE)

    @staticmethod
    def new_manage_sell_offer():
        return _builder(OperationType.MANAGE_SELL_OFFER)

    @staticmethod
    def new_create_passive_sell_offer():
        return _builder(OperationType.CREATE_PASSIVE_SELL_OFFER)

    @staticmethod
    def new_set_options():
        return _builder(OperationType.SET_OPTIONS)

    @staticmethod
    def new_change_trust():
        return _builder(OperationType.CHANGE_TRUST)

    @staticmethod
    def new_allow_trust():
        return _builder(OperationType.ALLOW_TRUST)

    @staticmethod
    def new_account_merge():
        return _builder(OperationType.ACCOUNT_MERGE)

    @staticmethod
    def new_inflation():
        return _builder(OperationType.INFLATION)

    @staticmethod
    def new_manage_data():
        return _builder(OperationType.MANAGE_DATA)

    @staticmethod
    def new_bump_sequence():
        return _builder(OperationType.BUMP_SEQUENCE)

    @staticmethod
    def new_manage_buy_offer():
        return _builder(OperationType.MANAGE_BUY_OFFER)

    @staticmethod
    def new_path_payment_strict_send():
        return _builder(OperationType.PATH_PAYMENT_STRICT_SEND)

    @staticmethod
    def new_create_claimable_balance():
        return _builder(OperationType.CREATE_CLAIMABLE_BALANCE)

    @staticmethod
    def new_claim_claimable_balance():
        return _builder(OperationType.CLAIM_CLAIMABLE_BALANCE)

    @staticmethod
    def new_begin_sponsoring_future_reserves():
        return _builder(OperationType.BEGIN_SPONSORING_FUTURE_RESERVES)

    @staticmethod
    def new_end_sponsoring_future_reserves():
        return _builder(OperationType.END_SPONSORING_FUTURE_RESERVES)

    @staticmethod
    def new_revoke_sponsorship():
        return _builder(OperationType.REVOKE_SPONSORSHIP)

    @staticmethod
    def new_clawback():
        return _builder(OperationType.CLAWBACK)

    @staticmethod
    def new_clawback_claimable_balance():
        return _builder(OperationType.CLAWBACK_CLAIMABLE_BALANCE)

    @staticmethod
    def new_set_trustline_flags():
        return _builder(OperationType.SET_TRUST_LINE_FLAGS)

    @staticmethod
    def new_liquidity_pool_deposit():
        return _builder(OperationType.LIQUIDITY_POOL_DEPOSIT)

    @staticmethod
    def new_liquidity_pool_withdraw():
        return _builder(OperationType.LIQUIDITY_POOL_WITHDRAW)


def _builder(op_type: OperationType) -> OperationBuilder:
    from .registry import lookup_builder

    return lookup_builder(op_type)()


OpT = TypeVar("OpT", bound=Operation)


class OperationBuilder(Generic[OpT]):
    """
    Base class for all operation builders.

    Generic over OpT = the operation class the builder produces.
    """

    op_cls: ClassVar[Type[Operation]]

    def __init__(self):
        """Initialize the builder."""
        self._fields: Dict[str, Any] = {}
        self._consumed = False

    def with_field(self, name: str, value: Any) -> OperationBuilder[OpT]:
        """
        Set a field value (chainable).

        Args:
            name: Field name
            value: Field value

        Returns:
            Self for chaining
        """
        if self._consumed:
            raise BuilderConsumedError()
        self._fields[name] = value
        return self

    def get_field(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def with_source_account(self, source: MuxedAccountLike) -> OperationBuilder[OpT]:
        return self.with_field("source_account", to_muxed_account(source))

    def require(self, name: str, message: str) -> Any:
        """Return a field, raising InvalidOperationError with ``message`` if unset."""
        value = self._fields.get(name)
        if value is None:
            raise InvalidOperationError(message)
        return value

    def validate(self) -> None:
        """
        Validate the collected fields.

        Raises:
            InvalidOperationError: Naming the first missing or invalid field
        """

    def build(self) -> OpT:
        """
        Validate the fields and create the operation.

        The builder is consumed even when validation fails.

        Raises:
            BuilderConsumedError: If build() was already called
            InvalidOperationError: If a field is missing or invalid
        """
        if self._consumed:
            raise BuilderConsumedError()
        self._consumed = True
        self.validate()
        op = self.op_cls(**self._fields)
        logger.debug("Built %s operation", self.op_cls.type_code.name)
        return op
