from datetime import datetime, time, timedelta
from typing import Dict, List, Optional

from ..errors import ConflictError, NotFoundError, TransitionError
from ..models.order import Order, utcnow
from ..utils.dto import to_order_dto
from ..utils.pagination import normalize_paging
from ..utils.validators import parse_date, validate_order_payload, validate_status
from .auth import AuthUser
from .logging import log_event
from .order_status import COMPLETED, PENDING, assert_can_transition


def _stored_items(items: List[Dict]) -> List[Dict]:
    return [
        {
            "product_name": it["product_name"],
            "quantity": it["quantity"],
            "unit_price": str(it["unit_price"]),
        }
        for it in items
    ]


# signed 64-bit, the widest integer key a backend stores
_MIN_PK = -(2 ** 63)
_MAX_PK = 2 ** 63


def _order_pk(order_id) -> Optional[int]:
    try:
        pk = int(order_id)
    except (TypeError, ValueError):
        return None
    if not _MIN_PK <= pk < _MAX_PK:
        return None
    return pk


class OrderService:
    """Ownership-scoped order storage backed by DB.

    Every method takes the calling user explicitly; an order owned by
    somebody else is reported exactly like one that does not exist.
    """

    def __init__(self, session_factory, page_size: int = 15):
        self._session_factory = session_factory
        self._page_size = page_size

    @staticmethod
    def _scoped(session, user: AuthUser):
        return session.query(Order).filter(Order.owner_id == user.id, Order.deleted_at.is_(None))

    def _load(self, session, user: AuthUser, order_id, *, for_update: bool = False) -> Order:
        pk = _order_pk(order_id)
        if pk is None:
            raise NotFoundError(order_id)
        q = self._scoped(session, user).filter(Order.id == pk)
        if for_update:
            q = q.with_for_update()
        order = q.first()
        if order is None:
            raise NotFoundError(order_id)
        return order

    def create_order(self, user: AuthUser, line_items, total_amount, status: Optional[str] = None) -> Dict:
        """Validate the payload and persist a new order owned by ``user``."""
        items, total = validate_order_payload(line_items, total_amount)
        status = PENDING if status is None else validate_status(status)
        with self._session_factory() as session:
            order = Order(
                owner_id=user.id,
                customer_name=user.display_name,
                line_items=_stored_items(items),
                total_amount=total,
                status=status,
            )
            session.add(order)
            session.flush()
            log_event("info", "order.created", order_id=order.id, owner_id=user.id, items=len(items), total=str(total))
            return to_order_dto(order)

    def list_orders(
        self,
        user: AuthUser,
        *,
        status: Optional[str] = None,
        date_from=None,
        date_to=None,
        page: int = 1,
    ) -> Dict:
        """Return dict: { items: [OrderDTO], page, page_size, total }

        ``date_from``/``date_to`` are inclusive calendar days (UTC) on
        ``created_at``; strings in YYYY-MM-DD form are accepted.
        """
        if status not in (None, ""):
            status = validate_status(status)
        start = parse_date(date_from, "from")
        end = parse_date(date_to, "to")
        p, ps = normalize_paging(page, self._page_size, max_page_size=self._page_size)

        with self._session_factory() as session:
            q = self._scoped(session, user)
            if status:
                q = q.filter(Order.status == status)
            if start is not None:
                q = q.filter(Order.created_at >= datetime.combine(start, time.min))
            if end is not None:
                q = q.filter(Order.created_at < datetime.combine(end + timedelta(days=1), time.min))
            total = q.count()
            rows = (
                q.order_by(Order.created_at.desc(), Order.id.desc())
                .offset((p - 1) * ps)
                .limit(ps)
                .all()
            )
            return {"items": [to_order_dto(r) for r in rows], "page": p, "page_size": ps, "total": total}

    def get_order(self, user: AuthUser, order_id) -> Dict:
        with self._session_factory() as session:
            return to_order_dto(self._load(session, user, order_id))

    def update_order(self, user: AuthUser, order_id, line_items, total_amount) -> Dict:
        """Replace items and total. Completed orders are frozen."""
        with self._session_factory() as session:
            order = self._load(session, user, order_id, for_update=True)
            if order.status == COMPLETED:
                raise ConflictError("Completed orders cannot be updated.")
            items, total = validate_order_payload(line_items, total_amount)
            order.line_items = _stored_items(items)
            order.total_amount = total
            order.customer_name = user.display_name
            order.updated_at = utcnow()
            session.flush()
            log_event("info", "order.updated", order_id=order.id, owner_id=user.id, items=len(items), total=str(total))
            return to_order_dto(order)

    def delete_order(self, user: AuthUser, order_id) -> None:
        """Soft delete: the row stays, every scoped query skips it."""
        with self._session_factory() as session:
            order = self._load(session, user, order_id, for_update=True)
            order.deleted_at = utcnow()
            session.flush()
            log_event("info", "order.deleted", order_id=order.id, owner_id=user.id)
        return None

    def update_status(self, user: AuthUser, order_id, new_status) -> Dict:
        new_status = validate_status(new_status)
        with self._session_factory() as session:
            order = self._load(session, user, order_id, for_update=True)
            previous = order.status
            try:
                assert_can_transition(order, new_status)
            except TransitionError:
                log_event("warning", "order.transition_rejected", order_id=order.id, current=previous, requested=new_status)
                raise
            order.status = new_status
            order.updated_at = utcnow()
            session.flush()
            log_event("info", "order.status_changed", order_id=order.id, owner_id=user.id, previous=previous, status=new_status)
            return to_order_dto(order)
