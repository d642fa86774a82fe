"""Cart router.

Every endpoint acts on the caller's own cart: the user id always comes from
the verified token, never from the request.
"""

from fastapi import APIRouter, status

from basket.presentation.api.dependencies import CartServiceDep, UserIdentity
from basket.presentation.api.schemas.cart import (
    AddItemRequest,
    CartResponse,
    CreateCartRequest,
)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create the caller's cart",
    responses={
        201: {"description": "Cart created with its first item"},
        400: {"description": "Invalid quantity or price"},
        409: {"description": "The caller already has a cart"},
    },
)
async def create_cart(
    request: CreateCartRequest,
    identity: UserIdentity,
    cart_service: CartServiceDep,
) -> CartResponse:
    cart = await cart_service.create_cart(
        user_id=identity.user_id,
        product_id=request.product_id,
        quantity=request.quantity,
        unit_price=request.unit_price,
    )
    return CartResponse.from_domain(cart)


@router.get(
    "",
    summary="Get the caller's cart",
    responses={404: {"description": "The caller has no cart"}},
)
async def get_cart(
    identity: UserIdentity,
    cart_service: CartServiceDep,
) -> CartResponse:
    cart = await cart_service.get_cart(identity.user_id)
    return CartResponse.from_domain(cart)


@router.delete(
    "",
    summary="Delete the caller's cart",
    responses={
        200: {"description": "The deleted cart"},
        404: {"description": "The caller has no cart"},
    },
)
async def delete_cart(
    identity: UserIdentity,
    cart_service: CartServiceDep,
) -> CartResponse:
    cart = await cart_service.delete_cart(identity.user_id)
    return CartResponse.from_domain(cart)


@router.post(
    "/items",
    summary="Add a product to the caller's cart",
    responses={
        400: {"description": "Invalid quantity or price"},
        404: {"description": "The caller has no cart"},
        409: {"description": "The cart was changed concurrently"},
    },
)
async def add_item(
    request: AddItemRequest,
    identity: UserIdentity,
    cart_service: CartServiceDep,
) -> CartResponse:
    """
    Add a product. If the product is already in the cart its quantity grows
    and the price stored with the line is kept.
    """
    cart = await cart_service.add_item(
        user_id=identity.user_id,
        product_id=request.product_id,
        quantity=request.quantity,
        unit_price=request.unit_price,
    )
    return CartResponse.from_domain(cart)


@router.delete(
    "/items/{product_id:path}",
    summary="Remove a product from the caller's cart",
    responses={
        404: {"description": "No cart, or the product is not in it"},
        409: {"description": "The cart was changed concurrently"},
    },
)
async def remove_item(
    product_id: str,
    identity: UserIdentity,
    cart_service: CartServiceDep,
) -> CartResponse:
    cart = await cart_service.remove_item(identity.user_id, product_id)
    return CartResponse.from_domain(cart)
