"""Unit tests for the order status graph and status parsing."""

import pytest

from orderflow.domain.exceptions import StatusParseError
from orderflow.domain.model.order_status import (
    TRANSITIONS,
    OrderStatus,
    OrderStatusVO,
    parse_status,
)


class TestTransitionGraph:

    @pytest.mark.parametrize("source, target", [
        (OrderStatus.PENDING, OrderStatus.CONFIRMED),
        (OrderStatus.PENDING, OrderStatus.CANCELLED),
        (OrderStatus.CONFIRMED, OrderStatus.PROCESSING),
        (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
        (OrderStatus.PROCESSING, OrderStatus.PAID),
        (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
        (OrderStatus.PAID, OrderStatus.SHIPPED),
        (OrderStatus.PAID, OrderStatus.REFUNDED),
        (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
        (OrderStatus.SHIPPED, OrderStatus.REFUNDED),
        (OrderStatus.DELIVERED, OrderStatus.REFUNDED),
    ])
    def test_allowed(self, source, target):
        assert OrderStatusVO(source).can_transition_to(target)

    @pytest.mark.parametrize("source, target", [
        (OrderStatus.PENDING, OrderStatus.SHIPPED),
        (OrderStatus.PENDING, OrderStatus.PENDING),
        (OrderStatus.PAID, OrderStatus.CANCELLED),
        (OrderStatus.DELIVERED, OrderStatus.SHIPPED),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
    ])
    def test_forbidden(self, source, target):
        assert not OrderStatusVO(source).can_transition_to(target)

    def test_every_status_has_an_entry(self):
        assert set(TRANSITIONS) == set(OrderStatus)

    def test_terminal_states(self):
        terminal = {s for s in OrderStatus if OrderStatusVO(s).is_terminal}
        assert terminal == {OrderStatus.CANCELLED, OrderStatus.REFUNDED}


class TestParseStatus:

    def test_case_insensitive(self):
        assert parse_status("shipped") == OrderStatus.SHIPPED
        assert parse_status("  Paid ") == OrderStatus.PAID

    def test_passes_enum_through(self):
        assert parse_status(OrderStatus.PAID) is OrderStatus.PAID

    def test_unknown_rejected(self):
        with pytest.raises(StatusParseError, match="Invalid order status: 'LOST'"):
            parse_status("LOST")

    def test_non_string_rejected(self):
        with pytest.raises(StatusParseError):
            parse_status(3)

    def test_vo_from_string(self):
        vo = OrderStatusVO.from_string("confirmed")
        assert vo == OrderStatusVO(OrderStatus.CONFIRMED)
        assert str(vo) == "CONFIRMED"

    def test_vo_defaults_to_pending(self):
        assert OrderStatusVO().value == OrderStatus.PENDING
