from fastapi import Request, status
from fastapi.responses import JSONResponse
from typing import Any, Callable, Optional


class APIException(Exception):
    """ Base class for all exceptions in the Shop API. """

    default_detail = "Something went wrong."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundException(APIException):
    """ Exception is raised when a referenced resource does not exist. """
    default_detail = "Resource not found."


class ProductNotFoundException(NotFoundException):
    """ Exception is raised when a product id does not resolve to a product. """

    def __init__(self, product_id: Any = None):
        self.product_id = product_id
        if product_id is None:
            super().__init__("Product not found.")
        else:
            super().__init__(f"Product with id {product_id} not found.")


class CategoryNotFoundException(NotFoundException):
    """ Exception is raised when a category id does not resolve to a category. """

    def __init__(self, category_id: Any = None):
        self.category_id = category_id
        if category_id is None:
            super().__init__("Category not found.")
        else:
            super().__init__(f"Category with id {category_id} not found.")


class CartNotFoundException(NotFoundException):
    """ Exception is raised when a session has no cart yet. """
    default_detail = "Cart not found."


class CartItemNotFoundException(NotFoundException):
    """ Exception is raised when a cart item is missing or belongs to another cart. """
    default_detail = "Cart item not found."


class InvalidQuantityException(APIException):
    """ Exception is raised when a requested quantity is zero or negative. """
    default_detail = "Quantity must be greater than zero."


class ConflictException(APIException):
    """ Exception is raised when a request conflicts with the current state of a resource. """
    default_detail = "Request conflicts with the current state of the resource."


class InsufficientStockException(ConflictException):
    """
    Exception is raised when a requested or accumulated quantity exceeds the product stock.

    When ``requested`` and ``total`` are given the message describes a merge into an
    existing cart line, otherwise it only reports the available stock.
    """

    def __init__(self, available: int, requested: Optional[int] = None, total: Optional[int] = None):
        self.available = available
        self.requested = requested
        self.total = total

        if requested is not None and total is not None:
            detail = f"Cannot add {requested} more. Total would be {total}, but only {available} available."
        else:
            detail = f"Insufficient stock. Only {available} items available."

        super().__init__(detail)


class DuplicateCartItemException(ConflictException):
    """ Exception is raised when a cart already holds a line for the product being inserted. """
    default_detail = "Product is already in the cart."


def create_exception_handler(status_code: int, detail: Any = None) -> Callable[[Request, Exception], JSONResponse]:
    async def exception_handler(request: Request, exception: APIException):
        return JSONResponse(
            content={"detail": detail if detail is not None else exception.detail},
            status_code=status_code
        )

    return exception_handler


def register_exception_handlers(app) -> None:
    # starlette resolves handlers along the MRO of the raised exception
    app.add_exception_handler(NotFoundException, create_exception_handler(status.HTTP_404_NOT_FOUND))
    app.add_exception_handler(InvalidQuantityException, create_exception_handler(status.HTTP_400_BAD_REQUEST))
    app.add_exception_handler(ConflictException, create_exception_handler(status.HTTP_400_BAD_REQUEST))
    app.add_exception_handler(APIException, create_exception_handler(status.HTTP_400_BAD_REQUEST))
