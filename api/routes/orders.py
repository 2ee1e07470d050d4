"""Order routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import (
    PageParams,
    get_current_user,
    get_db,
    get_page_params,
    require_roles,
)
from api.responses import PaginatedResponse, paginated_response
from domain.enums import OrderStatus, UserRole
from domain.mappers import OrderMapper
from domain.models import User
from domain.schemas.limits import MAX_DB_ID
from domain.schemas.order_schemas import (
    AssignDeliveryAgentRequest,
    OrderCreate,
    OrderFilter,
    OrderResponse,
    OrderStatusUpdate,
)
from services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger("campusfood.api.orders")


def _page(orders, total, paging: PageParams) -> dict:
    return paginated_response(
        [OrderMapper.to_response(o) for o in orders],
        total,
        paging.page,
        paging.limit,
    )


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Place an order. Only customers may order."""
    order = OrderService.create_order(db, payload, user)
    return OrderMapper.to_response(order)


@router.get("", response_model=PaginatedResponse[OrderResponse])
def list_orders(
    status: Optional[OrderStatus] = None,
    customer_id: Optional[int] = Query(None, le=MAX_DB_ID),
    delivery_agent_id: Optional[int] = Query(None, le=MAX_DB_ID),
    vendor_id: Optional[int] = Query(None, le=MAX_DB_ID),
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    user: User = Depends(require_roles(UserRole.ADMIN, UserRole.VENDOR)),
):
    """All orders for admins; vendors only see orders containing their meals."""
    filters = OrderFilter(
        status=status,
        customer_id=customer_id,
        delivery_agent_id=delivery_agent_id,
        vendor_id=vendor_id,
    )
    orders, total = OrderService.list_orders(
        db, paging.page, paging.limit, filters, user
    )
    return _page(orders, total, paging)


@router.get("/my-orders", response_model=PaginatedResponse[OrderResponse])
def list_my_orders(
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    orders, total = OrderService.list_customer_orders(
        db, user, paging.page, paging.limit
    )
    return _page(orders, total, paging)


@router.get("/delivery", response_model=PaginatedResponse[OrderResponse])
def list_delivery_orders(
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    user: User = Depends(require_roles(UserRole.DELIVERY_AGENT)),
):
    """Orders assigned to the calling delivery agent."""
    orders, total = OrderService.list_agent_orders(db, user, paging.page, paging.limit)
    return _page(orders, total, paging)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return OrderMapper.to_response(OrderService.get_order(db, order_id, user))


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    payload: OrderStatusUpdate,
    order_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    order = OrderService.update_status(db, order_id, payload.status, user)
    return OrderMapper.to_response(order)


@router.patch("/{order_id}/assign", response_model=OrderResponse)
def assign_delivery_agent(
    payload: AssignDeliveryAgentRequest,
    order_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserRole.ADMIN)),
):
    order = OrderService.assign_delivery_agent(db, order_id, payload.delivery_agent_id)
    return OrderMapper.to_response(order)


@router.delete("/{order_id}/cancel", response_model=OrderResponse)
def cancel_order(
    order_id: int = Path(..., le=MAX_DB_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return OrderMapper.to_response(OrderService.cancel_order(db, order_id, user))
