"""Unit tests for the wizard's navigation state machine."""

import pytest

from order_wizard.application.stage_controller import Stage, StageController
from order_wizard.domain.exceptions import DomainException, OutOfRangeError, StageIncompleteError


class TestPermissiveNavigation:

    def test_starts_at_customer_info(self):
        assert StageController().current == Stage.CUSTOMER_INFO

    def test_advance_and_retreat(self):
        controller = StageController()
        assert controller.advance() == Stage.PRODUCT_SELECTION
        assert controller.advance() == Stage.CONTRACT_TERMS
        assert controller.retreat() == Stage.PRODUCT_SELECTION

    def test_advance_clamped_at_review(self):
        controller = StageController()
        for _ in range(6):
            controller.advance()
        assert controller.current == Stage.REVIEW

    def test_retreat_clamped_at_first(self):
        controller = StageController()
        controller.retreat()
        assert controller.current == Stage.CUSTOMER_INFO

    def test_forward_without_completion_allowed(self):
        controller = StageController()
        assert controller.go_to(4) == Stage.REVIEW

    @pytest.mark.parametrize("number", [0, 5, -1])
    def test_go_to_out_of_range(self, number):
        controller = StageController()
        with pytest.raises(OutOfRangeError):
            controller.go_to(number)
        assert controller.current == Stage.CUSTOMER_INFO

    def test_out_of_range_is_not_a_user_error(self):
        assert not issubclass(OutOfRangeError, DomainException)
        assert issubclass(OutOfRangeError, ValueError)

    def test_reset(self):
        controller = StageController()
        controller.go_to(3)
        controller.mark_complete(Stage.CUSTOMER_INFO)
        controller.reset()
        assert controller.current == Stage.CUSTOMER_INFO
        assert not controller.is_complete(Stage.CUSTOMER_INFO)


class TestEnforcedOrder:

    def test_advance_blocked_until_complete(self):
        controller = StageController(enforce_order=True)
        with pytest.raises(StageIncompleteError, match="Customer Information"):
            controller.advance()
        controller.mark_complete(Stage.CUSTOMER_INFO)
        assert controller.advance() == Stage.PRODUCT_SELECTION

    def test_jump_needs_every_earlier_stage(self):
        controller = StageController(enforce_order=True)
        controller.mark_complete(Stage.CUSTOMER_INFO)
        controller.mark_complete(Stage.PRODUCT_SELECTION)
        with pytest.raises(StageIncompleteError, match="Contract Terms"):
            controller.go_to(4)

    def test_check_advance_counts_the_stage_being_completed(self):
        controller = StageController(enforce_order=True)
        controller.check_advance(after_completing=Stage.CUSTOMER_INFO)
        assert controller.current == Stage.CUSTOMER_INFO
        assert not controller.is_complete(Stage.CUSTOMER_INFO)

    def test_check_advance_refuses_other_stage(self):
        controller = StageController(enforce_order=True)
        controller.mark_complete(Stage.CUSTOMER_INFO)
        controller.advance()
        with pytest.raises(StageIncompleteError, match="Product Selection"):
            controller.check_advance(after_completing=Stage.CUSTOMER_INFO)
        assert controller.current == Stage.PRODUCT_SELECTION

    def test_check_advance_ignored_when_permissive(self):
        StageController().check_advance(after_completing=Stage.REVIEW)

    def test_backward_always_allowed(self):
        controller = StageController(enforce_order=True)
        controller.mark_complete(Stage.CUSTOMER_INFO)
        controller.advance()
        assert controller.retreat() == Stage.CUSTOMER_INFO


class TestStage:

    def test_titles(self):
        assert Stage.REVIEW.title == "Review & Finalize"

    def test_from_number(self):
        assert Stage.from_number(2) is Stage.PRODUCT_SELECTION
