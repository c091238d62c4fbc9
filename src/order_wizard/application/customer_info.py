"""Stage 1: customer name and optional pre-populated address."""

from __future__ import annotations

from order_wizard.application.dto import AddressInput, CustomerInfoInput
from order_wizard.domain.exceptions import StageValidationError, ValidationError
from order_wizard.domain.model.order import OrderUpdate
from order_wizard.domain.model.value_objects import Address

_ADDRESS_FIELDS = (
    ("addressLine1", "address_line1", "Address line 1 is required"),
    ("city", "city", "City is required"),
    ("state", "state", "State is required"),
    ("zipCode", "zip_code", "Zip code is required"),
)


class CustomerInfoStage:

    def validate(self, data: CustomerInfoInput) -> OrderUpdate:
        """Check the form and build the Stage 1 update.

        When *pre_populate* is off the address is dropped, however much
        of it was typed in.
        """
        errors: list[ValidationError] = []

        name = (data.customer_name or "").strip()
        if not name:
            errors.append(ValidationError("customerName", "Customer account is required"))

        address: Address | None = None
        if data.pre_populate:
            address_errors = self._check_address(data.address)
            errors.extend(address_errors)
            if not address_errors:
                address = self._to_address(data.address)  # type: ignore[arg-type]

        if errors:
            raise StageValidationError(errors)

        return OrderUpdate(customer_name=name, customer_address=address)

    @staticmethod
    def _check_address(raw: AddressInput | None) -> list[ValidationError]:
        if raw is None:
            return [
                ValidationError(f"address.{label}", message)
                for label, _, message in _ADDRESS_FIELDS
            ]
        return [
            ValidationError(f"address.{label}", message)
            for label, attr, message in _ADDRESS_FIELDS
            if not (getattr(raw, attr) or "").strip()
        ]

    @staticmethod
    def _to_address(raw: AddressInput) -> Address:
        line2 = (raw.address_line2 or "").strip() or None
        return Address(
            address_line1=raw.address_line1.strip(),
            address_line2=line2,
            city=raw.city.strip(),
            state=raw.state.strip(),
            zip_code=raw.zip_code.strip(),
        )
