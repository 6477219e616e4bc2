import pytest

from marketplace.models import Order
from marketplace.ordering.domain.models.order import generate_pickup_code


@pytest.mark.unit
class TestPickupCode:
    def test_code_is_four_digits(self):
        for _ in range(200):
            code = generate_pickup_code()
            assert len(code) == 4
            assert code.isdigit()
            assert 1000 <= int(code) <= 9999


@pytest.mark.unit
class TestOrderTransitions:
    @pytest.mark.parametrize("target", ["ready", "completed", "cancelled"])
    def test_pending_moves_forward(self, target):
        assert Order(status=Order.STATUS_PENDING).can_transition_to(target)

    @pytest.mark.parametrize("target", ["completed", "cancelled"])
    def test_ready_can_finish(self, target):
        assert Order(status=Order.STATUS_READY).can_transition_to(target)

    def test_ready_cannot_go_back(self):
        assert not Order(status=Order.STATUS_READY).can_transition_to(Order.STATUS_PENDING)

    @pytest.mark.parametrize("terminal", ["completed", "cancelled"])
    @pytest.mark.parametrize("target", ["pending", "ready", "completed", "cancelled"])
    def test_terminal_states_are_final(self, terminal, target):
        assert not Order(status=terminal).can_transition_to(target)

    def test_unknown_status_is_rejected(self):
        assert not Order(status=Order.STATUS_PENDING).can_transition_to("shipped")
