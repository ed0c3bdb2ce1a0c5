"""Bitkub API error code table.

The exchange reports application failures as a small integer in the
``error`` field of every response envelope. The numbers are part of the wire
format: entries may be added but never renumbered or reused.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class ErrorCategory(str, Enum):
    """Broad grouping of error codes."""

    NONE = "none"
    MALFORMED_INPUT = "malformed_input"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_STATE = "resource_state"
    POLICY = "policy"
    SERVER = "server"
    UNKNOWN = "unknown"


class ErrorCode(IntEnum):
    """Error codes returned in the ``error`` field."""

    NO_ERROR = 0
    INVALID_JSON_PAYLOAD = 1
    MISSING_API_KEY = 2
    INVALID_API_KEY = 3
    API_PENDING_FOR_ACTIVATION = 4
    IP_NOT_ALLOWED = 5
    MISSING_INVALID_SIGNATURE = 6
    MISSING_TIMESTAMP = 7
    INVALID_TIMESTAMP = 8
    INVALID_USER = 9
    INVALID_PARAMETER = 10
    INVALID_SYMBOL = 11
    INVALID_AMOUNT = 12
    INVALID_RATE = 13
    IMPROPER_RATE = 14
    AMOUNT_TOO_LOW = 15
    FAILED_TO_GET_BALANCE = 16
    WALLET_IS_EMPTY = 17
    INSUFFICIENT_BALANCE = 18
    FAILED_TO_INSERT_ORDER = 19
    FAILED_TO_DEDUCT_BALANCE = 20
    INVALID_ORDER_FOR_CANCELLATION = 21
    INVALID_SIDE = 22
    FAILED_TO_UPDATE_ORDER_STATUS = 23
    INVALID_ORDER_FOR_LOOKUP = 24
    KYC_LEVEL_1_REQUIRED = 25
    LIMIT_EXCEEDS = 30
    PENDING_WITHDRAWAL_EXISTS = 40
    INVALID_CURRENCY_FOR_WITHDRAWAL = 41
    ADDRESS_NOT_IN_WHITELIST = 42
    FAILED_TO_DEDUCT_CRYPTO = 43
    FAILED_TO_CREATE_WITHDRAWAL_RECORD = 44
    NONCE_HAS_TO_BE_NUMERIC = 45
    INVALID_NONCE = 46
    WITHDRAWAL_LIMIT_EXCEEDS = 47
    INVALID_BANK_ACCOUNT = 48
    BANK_LIMIT_EXCEEDS = 49
    PENDING_WITHDRAWAL_EXISTS_2 = 50
    WITHDRAWAL_UNDER_MAINTENANCE = 51
    INVALID_PERMISSION = 52
    INVALID_INTERNAL_ADDRESS = 53
    ADDRESS_DEPRECATED = 54
    CANCEL_ONLY_MODE = 55
    SUSPENDED_FROM_PURCHASING = 56
    SUSPENDED_FROM_SELLING = 57
    SERVER_ERROR = 90


@dataclass(frozen=True)
class ErrorCodeInfo:
    """Description of a single error code."""

    code: int
    name: str
    category: ErrorCategory
    message: str

    @property
    def is_known(self) -> bool:
        return self.category is not ErrorCategory.UNKNOWN


_C = ErrorCategory

_TABLE: dict[ErrorCode, tuple[ErrorCategory, str]] = {
    ErrorCode.NO_ERROR: (_C.NONE, "No error"),
    ErrorCode.INVALID_JSON_PAYLOAD: (_C.MALFORMED_INPUT, "Invalid JSON payload"),
    ErrorCode.MISSING_API_KEY: (_C.AUTHORIZATION, "Missing X-BTK-APIKEY"),
    ErrorCode.INVALID_API_KEY: (_C.AUTHORIZATION, "Invalid API key"),
    ErrorCode.API_PENDING_FOR_ACTIVATION: (_C.AUTHORIZATION, "API pending for activation"),
    ErrorCode.IP_NOT_ALLOWED: (_C.AUTHORIZATION, "IP not allowed"),
    ErrorCode.MISSING_INVALID_SIGNATURE: (_C.MALFORMED_INPUT, "Missing / invalid signature"),
    ErrorCode.MISSING_TIMESTAMP: (_C.MALFORMED_INPUT, "Missing timestamp"),
    ErrorCode.INVALID_TIMESTAMP: (_C.MALFORMED_INPUT, "Invalid timestamp"),
    ErrorCode.INVALID_USER: (_C.AUTHORIZATION, "Invalid user"),
    ErrorCode.INVALID_PARAMETER: (_C.VALIDATION, "Invalid parameter"),
    ErrorCode.INVALID_SYMBOL: (_C.VALIDATION, "Invalid symbol"),
    ErrorCode.INVALID_AMOUNT: (_C.VALIDATION, "Invalid amount"),
    ErrorCode.INVALID_RATE: (_C.VALIDATION, "Invalid rate"),
    ErrorCode.IMPROPER_RATE: (_C.VALIDATION, "Improper rate"),
    ErrorCode.AMOUNT_TOO_LOW: (_C.VALIDATION, "Amount too low"),
    ErrorCode.FAILED_TO_GET_BALANCE: (_C.SERVER, "Failed to get balance"),
    ErrorCode.WALLET_IS_EMPTY: (_C.RESOURCE_STATE, "Wallet is empty"),
    ErrorCode.INSUFFICIENT_BALANCE: (_C.RESOURCE_STATE, "Insufficient balance"),
    ErrorCode.FAILED_TO_INSERT_ORDER: (_C.SERVER, "Failed to insert order into db"),
    ErrorCode.FAILED_TO_DEDUCT_BALANCE: (_C.SERVER, "Failed to deduct balance"),
    ErrorCode.INVALID_ORDER_FOR_CANCELLATION: (_C.RESOURCE_STATE, "Invalid order for cancellation"),
    ErrorCode.INVALID_SIDE: (_C.VALIDATION, "Invalid side"),
    ErrorCode.FAILED_TO_UPDATE_ORDER_STATUS: (_C.SERVER, "Failed to update order status"),
    ErrorCode.INVALID_ORDER_FOR_LOOKUP: (_C.RESOURCE_STATE, "Invalid order for lookup"),
    ErrorCode.KYC_LEVEL_1_REQUIRED: (_C.POLICY, "KYC level 1 is required to proceed"),
    ErrorCode.LIMIT_EXCEEDS: (_C.POLICY, "Limit exceeds"),
    ErrorCode.PENDING_WITHDRAWAL_EXISTS: (_C.RESOURCE_STATE, "Pending withdrawal exists"),
    ErrorCode.INVALID_CURRENCY_FOR_WITHDRAWAL: (_C.VALIDATION, "Invalid currency for withdrawal"),
    ErrorCode.ADDRESS_NOT_IN_WHITELIST: (_C.POLICY, "Address is not in whitelist"),
    ErrorCode.FAILED_TO_DEDUCT_CRYPTO: (_C.SERVER, "Failed to deduct crypto"),
    ErrorCode.FAILED_TO_CREATE_WITHDRAWAL_RECORD: (_C.SERVER, "Failed to create withdrawal record"),
    ErrorCode.NONCE_HAS_TO_BE_NUMERIC: (_C.VALIDATION, "Nonce has to be numeric"),
    ErrorCode.INVALID_NONCE: (_C.VALIDATION, "Invalid nonce"),
    ErrorCode.WITHDRAWAL_LIMIT_EXCEEDS: (_C.POLICY, "Withdrawal limit exceeds"),
    ErrorCode.INVALID_BANK_ACCOUNT: (_C.VALIDATION, "Invalid bank account"),
    ErrorCode.BANK_LIMIT_EXCEEDS: (_C.POLICY, "Bank limit exceeds"),
    ErrorCode.PENDING_WITHDRAWAL_EXISTS_2: (_C.RESOURCE_STATE, "Pending withdrawal exists"),
    ErrorCode.WITHDRAWAL_UNDER_MAINTENANCE: (_C.POLICY, "Withdrawal is under maintenance"),
    ErrorCode.INVALID_PERMISSION: (_C.AUTHORIZATION, "Invalid permission"),
    ErrorCode.INVALID_INTERNAL_ADDRESS: (_C.VALIDATION, "Invalid internal address"),
    ErrorCode.ADDRESS_DEPRECATED: (_C.VALIDATION, "Address has been deprecated"),
    ErrorCode.CANCEL_ONLY_MODE: (_C.POLICY, "Cancel only mode"),
    ErrorCode.SUSPENDED_FROM_PURCHASING: (_C.POLICY, "User has been suspended from purchasing"),
    ErrorCode.SUSPENDED_FROM_SELLING: (_C.POLICY, "User has been suspended from selling"),
    ErrorCode.SERVER_ERROR: (_C.SERVER, "Server error (please contact support)"),
}

ERROR_CODES: dict[int, ErrorCodeInfo] = {
    int(code): ErrorCodeInfo(int(code), code.name, category, message)
    for code, (category, message) in _TABLE.items()
}


def lookup_error(code: int) -> ErrorCodeInfo:
    """
    Look up an error code.

    Codes the table does not know about (the exchange may add new ones)
    yield a generic entry instead of raising.
    """
    info = ERROR_CODES.get(code)
    if info is not None:
        return info
    return ErrorCodeInfo(
        code=code,
        name="UNRECOGNIZED",
        category=ErrorCategory.UNKNOWN,
        message=f"Unrecognized error code {code}",
    )


def error_text(code: int) -> str:
    """Human-readable text for an error code."""
    return lookup_error(code).message
