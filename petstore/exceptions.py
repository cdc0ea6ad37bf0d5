"""Domain exceptions.

Every exception carries the HTTP status and the machine-readable code the
central error handler renders into the response body. Services raise them,
routes let them propagate.
"""


class ErrorCodes:
    VALIDATION_FAILED = 'ERROR_400'
    AUTHENTICATION_FAILED = 'ERROR_401'
    ACCESS_DENIED = 'ERROR_403'
    INTERNAL_SERVER_ERROR = 'ERROR_500'

    INVALID_USER = 'ERROR_1000'
    USER_NOT_FOUND = 'ERROR_1001'
    USER_IN_USE = 'ERROR_1002'
    EMAIL_ALREADY_IN_USE = 'ERROR_1003'

    ADDRESS_NOT_FOUND = 'ERROR_2001'
    ADDRESS_IN_USE = 'ERROR_2002'

    INVALID_CATEGORY = 'ERROR_3000'
    CATEGORY_NOT_FOUND = 'ERROR_3001'
    CATEGORY_IN_USE = 'ERROR_3002'
    CATEGORY_ALREADY_EXISTS = 'ERROR_3003'

    INVALID_PET = 'ERROR_4000'
    PET_NOT_FOUND = 'ERROR_4001'
    PET_ALREADY_SOLD = 'ERROR_4002'
    PET_ALREADY_EXISTS_IN_USER_CART = 'ERROR_4003'
    PET_IN_USE = 'ERROR_4004'

    INVALID_DISCOUNT_CODE = 'ERROR_5000'
    DISCOUNT_NOT_FOUND = 'ERROR_5001'
    DISCOUNT_IN_USE = 'ERROR_5002'
    DISCOUNT_ALREADY_EXISTS = 'ERROR_5003'

    CART_ITEM_NOT_FOUND = 'ERROR_6001'
    USER_CART_NOT_FOUND = 'ERROR_6002'
    CART_IS_EMPTY = 'ERROR_6003'

    ORDER_ACCESS_DENIED = 'ERROR_7001'
    ORDER_NOT_FOUND = 'ERROR_7002'
    INVALID_ORDER_STATE = 'ERROR_7003'

    INVALID_PAYMENT = 'ERROR_8001'
    UNSUPPORTED_PAYMENT = 'ERROR_8002'
    UNSUPPORTED_PAYMENT_TYPE = 'ERROR_8003'


class PetStoreException(Exception):
    """Base exception for this application."""
    status_code = 500
    code = ErrorCodes.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationException(PetStoreException):
    status_code = 400
    code = ErrorCodes.VALIDATION_FAILED


class AuthenticationFailedException(PetStoreException):
    status_code = 401
    code = ErrorCodes.AUTHENTICATION_FAILED


class AccessDeniedException(PetStoreException):
    status_code = 403
    code = ErrorCodes.ACCESS_DENIED

    def __init__(self, message: str = 'Access denied'):
        super().__init__(message)


# --- Users ---

class InvalidUserException(PetStoreException):
    status_code = 400
    code = ErrorCodes.INVALID_USER


class UserNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.USER_NOT_FOUND

    def __init__(self, user_id):
        super().__init__(f"User with ID '{user_id}' not found")
        self.user_id = user_id


class UserInUseException(PetStoreException):
    """Raised when deleting a user who still owns or created pets, or has placed orders."""
    status_code = 409
    code = ErrorCodes.USER_IN_USE

    def __init__(self, user_id, user_email, owned_pet_count, created_pet_count, order_count=0):
        self.user_id = user_id
        self.user_email = user_email
        self.owned_pet_count = owned_pet_count
        self.created_pet_count = created_pet_count
        self.order_count = order_count
        reasons = []
        if owned_pet_count > 0:
            reasons.append(f'ownership of {owned_pet_count} pet(s)')
        if created_pet_count > 0:
            reasons.append(f'created {created_pet_count} pet(s)')
        if order_count > 0:
            reasons.append(f'placed {order_count} order(s)')
        super().__init__(
            f"Cannot delete user '{user_email}' (ID: {user_id}) because they have {' and '.join(reasons)} "
            f"that still exist in the database")

    @property
    def total_pet_count(self):
        return self.owned_pet_count + self.created_pet_count


class EmailAlreadyInUseException(PetStoreException):
    status_code = 409
    code = ErrorCodes.EMAIL_ALREADY_IN_USE

    def __init__(self, email):
        super().__init__(f"Email '{email}' is already in use")


# --- Addresses ---

class AddressNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.ADDRESS_NOT_FOUND

    def __init__(self, address_id):
        super().__init__(f"Address with ID '{address_id}' not found")


class AddressInUseException(PetStoreException):
    status_code = 409
    code = ErrorCodes.ADDRESS_IN_USE

    def __init__(self, address_id):
        super().__init__(
            f"Cannot delete address with ID '{address_id}' because it is associated with existing orders")


# --- Categories ---

class InvalidCategoryException(PetStoreException):
    status_code = 400
    code = ErrorCodes.INVALID_CATEGORY


class CategoryNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.CATEGORY_NOT_FOUND

    def __init__(self, category_id):
        super().__init__(f"Category with ID '{category_id}' not found")


class CategoryInUseException(PetStoreException):
    status_code = 409
    code = ErrorCodes.CATEGORY_IN_USE

    def __init__(self, category_id, category_name, pet_count):
        super().__init__(
            f"Cannot delete category '{category_name}' (ID: {category_id}) because it is currently "
            f"being used by {pet_count} pet(s)")
        self.category_id = category_id
        self.category_name = category_name
        self.pet_count = pet_count


class CategoryAlreadyExistsException(PetStoreException):
    status_code = 409
    code = ErrorCodes.CATEGORY_ALREADY_EXISTS

    def __init__(self, name):
        super().__init__(f"Category with name '{name}' already exists.")


# --- Pets ---

class InvalidPetException(PetStoreException):
    status_code = 400
    code = ErrorCodes.INVALID_PET


class PetNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.PET_NOT_FOUND

    def __init__(self, pet_id):
        super().__init__(f"Pet with ID '{pet_id}' not found")
        self.pet_id = pet_id


class PetAlreadySoldException(PetStoreException):
    status_code = 409
    code = ErrorCodes.PET_ALREADY_SOLD

    def __init__(self, pet_id):
        super().__init__(f"Pet with ID '{pet_id}' has already been sold.")
        self.pet_id = pet_id


class PetAlreadyExistInUserCartException(PetStoreException):
    status_code = 409
    code = ErrorCodes.PET_ALREADY_EXISTS_IN_USER_CART

    def __init__(self, pet_id):
        super().__init__(f"Pet with ID '{pet_id}' is already in the cart.")


class PetInUseException(PetStoreException):
    status_code = 409
    code = ErrorCodes.PET_IN_USE

    def __init__(self, pet_id):
        super().__init__(f"Cannot delete pet with ID '{pet_id}' because it is part of existing orders")


# --- Discounts ---

class InvalidDiscountException(PetStoreException):
    status_code = 400
    code = ErrorCodes.INVALID_DISCOUNT_CODE


class DiscountNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.DISCOUNT_NOT_FOUND

    def __init__(self, discount_id):
        super().__init__(f"Discount with ID '{discount_id}' not found")


class DiscountInUseException(PetStoreException):
    status_code = 409
    code = ErrorCodes.DISCOUNT_IN_USE

    def __init__(self, discount_id):
        super().__init__(
            f"Cannot delete discount with ID '{discount_id}' because it is applied to existing orders")


class DiscountAlreadyExistsException(PetStoreException):
    status_code = 409
    code = ErrorCodes.DISCOUNT_ALREADY_EXISTS

    def __init__(self, code):
        super().__init__(f"Discount with code '{code}' already exists")


# --- Cart ---

class CartItemNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.CART_ITEM_NOT_FOUND

    def __init__(self, cart_item_id):
        super().__init__(f"Cart item with ID '{cart_item_id}' not found")


class UserCartNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.USER_CART_NOT_FOUND

    def __init__(self, user_id):
        super().__init__(f"Cart not found for user with ID '{user_id}'")


class CartEmptyException(PetStoreException):
    status_code = 400
    code = ErrorCodes.CART_IS_EMPTY

    def __init__(self, user_id):
        super().__init__(f"Cart is empty for user with ID: {user_id}")


# --- Orders ---

class OrderOwnershipException(PetStoreException):
    status_code = 403
    code = ErrorCodes.ORDER_ACCESS_DENIED

    def __init__(self, order_id, user_id):
        super().__init__(f"User {user_id} does not own order {order_id}")


class OrderNotFoundException(PetStoreException):
    status_code = 404
    code = ErrorCodes.ORDER_NOT_FOUND

    def __init__(self, order_id, user_id=None):
        if user_id is None:
            super().__init__(f"Order with id {order_id} not found.")
        else:
            super().__init__(f"Order with id {order_id} not found for user {user_id}.")


class InvalidOrderStateException(PetStoreException):
    status_code = 400
    code = ErrorCodes.INVALID_ORDER_STATE


# --- Payments ---

class InvalidPaymentException(PetStoreException):
    status_code = 400
    code = ErrorCodes.INVALID_PAYMENT


class UnsupportedPaymentException(PetStoreException):
    status_code = 400
    code = ErrorCodes.UNSUPPORTED_PAYMENT


class UnsupportedPaymentTypeException(PetStoreException):
    status_code = 400
    code = ErrorCodes.UNSUPPORTED_PAYMENT_TYPE
