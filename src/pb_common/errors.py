"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Profile
  2xxx: Restaurant
  3xxx: Food
  4xxx: Review (40xx food reviews, 41xx general reviews)
  5xxx: Message
  9xxx: System
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


# --- 1xxx: Profile ---

class ProfileNotFoundError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Profile not found", 404)


class ProfileExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Profile already exists for this user", 409)


class InvalidAuthUserError(AppError):
    def __init__(self, auth_id: str) -> None:
        super().__init__(
            1003, f"Invalid auth_id: user {auth_id} does not exist in auth system", 400
        )


class NotProfileOwnerError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "You can only delete your own profile", 403)


class NameChangeUsedError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "You can only change your name once.", 403)


# --- 2xxx: Restaurant ---

class RestaurantNotFoundError(AppError):
    def __init__(self, restaurant_id: int) -> None:
        super().__init__(2001, f"Restaurant not found: {restaurant_id}", 404)


# --- 3xxx: Food ---

class FoodNotFoundError(AppError):
    def __init__(self, food_id: int) -> None:
        super().__init__(3001, f"Food item not found: {food_id}", 404)


# --- 4xxx: Review ---

class FoodReviewNotFoundError(AppError):
    def __init__(self, review_id: int) -> None:
        super().__init__(4001, f"Food review not found: {review_id}", 404)


class UserIdRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(4002, "User ID is required", 400)


class NotReviewOwnerError(AppError):
    def __init__(self, review_id: int) -> None:
        super().__init__(4003, f"Review {review_id} belongs to another user", 403)


class GeneralReviewNotFoundError(AppError):
    def __init__(self, review_id: int) -> None:
        super().__init__(4101, f"General review not found: {review_id}", 404)


# --- 5xxx: Message ---

class MessageNotFoundError(AppError):
    def __init__(self, message_id: int) -> None:
        super().__init__(5001, f"Message not found: {message_id}", 404)


# --- 9xxx: System ---

class DataAccessError(AppError):
    """Store failure. The message never carries driver detail."""

    def __init__(self) -> None:
        super().__init__(9002, "Internal server error", 500)


class MissingFieldError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, detail, 400)
