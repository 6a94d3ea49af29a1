"""Repository for the Order aggregate."""

from sickfits.domain import sickfits
from sickfits.order.order import Order


@sickfits.repository(part_of=Order)
class OrderRepository:
    def find_for_user(self, user_id) -> list[Order]:
        """A user's orders, newest first."""
        orders = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(orders, key=lambda o: o.created_at.timestamp() if o.created_at else 0, reverse=True)

    def find_by_charge(self, charge_id) -> Order | None:
        """Look up the order recorded for a gateway charge (used for reconciliation)."""
        return self._dao.query.filter(charge=str(charge_id)).all().first
