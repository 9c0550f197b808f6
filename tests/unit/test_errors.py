"""Tests for pb_common.errors and pb_common.response."""

from src.pb_common.errors import (
    AppError,
    DataAccessError,
    FoodReviewNotFoundError,
    InvalidAuthUserError,
    MissingFieldError,
    NameChangeUsedError,
    NotReviewOwnerError,
    ProfileExistsError,
    RestaurantNotFoundError,
)
from src.pb_common.response import Pagination, data_response, error_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=1002, message="Profile exists", http_status=409)
        assert err.http_status == 409

    def test_is_exception(self) -> None:
        err = AppError(code=1001, message="test")
        assert isinstance(err, Exception)


class TestSpecificErrors:
    def test_restaurant_not_found(self) -> None:
        err = RestaurantNotFoundError(42)
        assert err.code == 2001
        assert err.http_status == 404
        assert "42" in err.message

    def test_food_review_not_found(self) -> None:
        err = FoodReviewNotFoundError(7)
        assert err.code == 4001
        assert err.http_status == 404

    def test_not_review_owner(self) -> None:
        assert NotReviewOwnerError(7).http_status == 403

    def test_profile_conflicts(self) -> None:
        assert ProfileExistsError().http_status == 409
        assert NameChangeUsedError().http_status == 403
        assert InvalidAuthUserError("abc").http_status == 400

    def test_missing_field_keeps_detail(self) -> None:
        err = MissingFieldError("Email is required")
        assert err.http_status == 400
        assert err.message == "Email is required"

    def test_data_access_hides_detail(self) -> None:
        err = DataAccessError()
        assert err.http_status == 500
        assert err.message == "Internal server error"


class TestErrorResponse:
    def test_shape(self) -> None:
        d = error_response(4001, "Food review not found: 7").model_dump()
        assert d["code"] == 4001
        assert d["error"] == "Food review not found: 7"
        assert "timestamp" in d
        assert d["request_id"].startswith("req_")


class TestPagination:
    def test_middle_page(self) -> None:
        p = Pagination.build(page=2, limit=10, total_count=25)
        assert p.totalPages == 3
        assert p.hasNextPage is True
        assert p.hasPrevPage is True

    def test_last_page(self) -> None:
        p = Pagination.build(page=3, limit=10, total_count=25)
        assert p.hasNextPage is False

    def test_empty(self) -> None:
        p = Pagination.build(page=1, limit=10, total_count=0)
        assert p.totalPages == 0
        assert p.hasNextPage is False
        assert p.hasPrevPage is False

    def test_data_response_envelope(self) -> None:
        body = data_response([1, 2], Pagination.build(1, 2, 2))
        assert body["data"] == [1, 2]
        assert body["pagination"]["totalCount"] == 2

    def test_data_response_without_pagination(self) -> None:
        assert data_response([]) == {"data": []}
