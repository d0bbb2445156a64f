"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth / wallet ownership
  3xxx: Market
  5xxx: Position / ledger

Messages on ledger errors must never echo another position's wallet or market.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth / wallet ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid or expired token", 401)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1006, "Admin privileges required", 403)


class WalletNotAuthorizedError(AppError):
    def __init__(self, reason: str = "Wallet ownership proof rejected") -> None:
        super().__init__(1010, reason, 401)


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, market_address: str) -> None:
        super().__init__(3001, f"Market not found: {market_address}", 404)


class MarketAlreadyTrackedError(AppError):
    def __init__(self, market_address: str) -> None:
        super().__init__(3003, f"Market already tracked: {market_address}", 409)


# --- 5xxx: Position / ledger ---

class DuplicateCommitmentError(AppError):
    def __init__(self) -> None:
        super().__init__(5002, "A position with this commitment already exists", 409)


class InvalidEncryptedValueKindError(AppError):
    def __init__(self, field: str, expected: str, actual: str) -> None:
        super().__init__(
            5003,
            f"Invalid encrypted value kind for {field}: expected {expected}, got {actual}",
            422,
        )


class InvalidCommitmentError(AppError):
    def __init__(self) -> None:
        super().__init__(5004, "Commitment hash must be 32 bytes of hex", 422)


class CommitmentMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(5005, "Commitment does not match the encrypted trade", 422)


class PositionNotFoundError(AppError):
    def __init__(self) -> None:
        super().__init__(5006, "Position not found", 404)


class PositionNotSettledError(AppError):
    def __init__(self) -> None:
        super().__init__(5007, "Position is not settled yet", 422)


class SettlementAlreadyRecordedError(AppError):
    def __init__(self) -> None:
        super().__init__(5008, "Settlement amounts already recorded", 409)


class InvalidSettlementPayoutError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5009, f"Invalid settlement payout: {detail}", 422)
