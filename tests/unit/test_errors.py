"""Tests for dm_common.errors and dm_common.response."""

from src.dm_common.errors import (
    AppError,
    DuplicateCommitmentError,
    InvalidEncryptedValueKindError,
    MarketAlreadyTrackedError,
    MarketNotFoundError,
    PositionNotFoundError,
    WalletNotAuthorizedError,
)
from src.dm_common.response import error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=5002, message="test"), Exception)


class TestSpecificErrors:
    def test_duplicate_commitment_is_generic(self) -> None:
        err = DuplicateCommitmentError()
        assert err.code == 5002
        assert err.http_status == 409
        assert "wallet" not in err.message.lower()

    def test_invalid_kind_names_field(self) -> None:
        err = InvalidEncryptedValueKindError("encrypted_side", "bool", "uint256")
        assert err.code == 5003
        assert err.http_status == 422
        assert "encrypted_side" in err.message
        assert "uint256" in err.message

    def test_position_not_found(self) -> None:
        err = PositionNotFoundError()
        assert (err.code, err.http_status) == (5006, 404)

    def test_market_errors(self) -> None:
        assert MarketNotFoundError("MKT").http_status == 404
        assert MarketAlreadyTrackedError("MKT").code == 3003

    def test_wallet_not_authorized(self) -> None:
        err = WalletNotAuthorizedError("Ownership proof expired")
        assert (err.code, err.http_status) == (1010, 401)
        assert err.message == "Ownership proof expired"


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"id": "abc"})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"id": "abc"}

    def test_request_id_override(self) -> None:
        assert success_response(None, "req_fixed").request_id == "req_fixed"

    def test_error(self) -> None:
        resp = error_response(5002, "Duplicate")
        assert resp.code == 5002
        assert resp.data is None
