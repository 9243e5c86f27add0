"""
Serializers for license and seat endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import Currency, LicenseType, PaymentCycle, RenewalCycle
from licenses.application.commands.create_license import LicenseFields
from licenses.domain.license import resolve_notice_period


def _choices(enum_cls):
    return [member.value for member in enum_cls]


class LicenseRequestSerializer(serializers.Serializer):
    """Serializer for license create and update requests."""

    name = serializers.CharField(max_length=200)
    license_type = serializers.ChoiceField(
        choices=_choices(LicenseType), required=False, allow_null=True
    )
    key = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    total_quantity = serializers.IntegerField()
    price = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True
    )
    purchase_date = serializers.DateField()
    expiry_date = serializers.DateField(required=False, allow_null=True)
    contract_date = serializers.DateField(required=False, allow_null=True)
    notice_period_type = serializers.ChoiceField(
        choices=["", "30", "90", "custom"], required=False, allow_blank=True
    )
    notice_period_custom = serializers.IntegerField(required=False, allow_null=True)
    admin_name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    payment_cycle = serializers.ChoiceField(
        choices=_choices(PaymentCycle), required=False, allow_null=True
    )
    unit_price = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True
    )
    currency = serializers.ChoiceField(
        choices=_choices(Currency), required=False, default=Currency.KRW.value
    )
    exchange_rate = serializers.DecimalField(
        max_digits=12, decimal_places=4, required=False, default=1, min_value=0
    )
    is_vat_included = serializers.BooleanField(required=False, default=False)
    renewal_cycle = serializers.ChoiceField(
        choices=_choices(RenewalCycle), required=False, default=RenewalCycle.MANUAL.value
    )
    cycle_months = serializers.IntegerField(required=False, allow_null=True)
    first_purchased_at = serializers.DateField(required=False, allow_null=True)
    last_renewed_at = serializers.DateField(required=False, allow_null=True)

    def to_fields(self) -> LicenseFields:
        """Build LicenseFields from validated data. Raises domain ValidationError."""
        data = self.validated_data
        payment_cycle = data.get("payment_cycle")
        license_type = data.get("license_type")
        return LicenseFields(
            name=data["name"],
            total_quantity=data["total_quantity"],
            purchase_date=data["purchase_date"],
            license_type=LicenseType(license_type) if license_type else None,
            key=data.get("key"),
            price=data.get("price"),
            expiry_date=data.get("expiry_date"),
            contract_date=data.get("contract_date"),
            notice_period_days=resolve_notice_period(
                data.get("notice_period_type"), data.get("notice_period_custom")
            ),
            admin_name=data.get("admin_name"),
            description=data.get("description"),
            payment_cycle=PaymentCycle(payment_cycle) if payment_cycle else None,
            unit_price=data.get("unit_price"),
            currency=Currency(data["currency"]),
            exchange_rate=data["exchange_rate"],
            is_vat_included=data["is_vat_included"],
            renewal_cycle=RenewalCycle(data["renewal_cycle"]),
            cycle_months=data.get("cycle_months"),
            first_purchased_at=data.get("first_purchased_at"),
            last_renewed_at=data.get("last_renewed_at"),
        )


class LicenseSerializer(serializers.Serializer):
    """Serializer for the License entity."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    license_type = serializers.CharField()
    key = serializers.CharField(allow_null=True)
    total_quantity = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)
    purchase_date = serializers.DateField()
    expiry_date = serializers.DateField(allow_null=True)
    contract_date = serializers.DateField(allow_null=True)
    notice_period_days = serializers.IntegerField(allow_null=True)
    admin_name = serializers.CharField(allow_null=True)
    description = serializers.CharField(allow_null=True)
    payment_cycle = serializers.CharField(allow_null=True)
    unit_price = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)
    currency = serializers.CharField()
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=4)
    is_vat_included = serializers.BooleanField()
    total_amount_foreign = serializers.IntegerField(allow_null=True)
    total_amount_krw = serializers.IntegerField(allow_null=True)
    renewal_cycle = serializers.CharField()
    cycle_months = serializers.IntegerField(allow_null=True)
    first_purchased_at = serializers.DateField(allow_null=True)
    last_renewed_at = serializers.DateField(allow_null=True)
    renewal_date = serializers.DateField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


class LicenseSummarySerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    license = LicenseSerializer()
    assigned_quantity = serializers.IntegerField()
    remaining_quantity = serializers.IntegerField()


class SeatSerializer(serializers.Serializer):
    """Serializer for SeatDTO."""

    id = serializers.IntegerField()
    key = serializers.CharField(allow_null=True)
    assigned_to = serializers.UUIDField(allow_null=True)
    assignee_name = serializers.CharField(allow_null=True)


class LicenseAssignmentSerializer(serializers.Serializer):
    """Serializer for an active assignment on the license detail."""

    id = serializers.UUIDField()
    employee_id = serializers.UUIDField()
    employee_name = serializers.CharField(allow_null=True)
    employee_email = serializers.CharField(allow_null=True)
    seat_id = serializers.IntegerField(allow_null=True)
    seat_key = serializers.CharField(allow_null=True)
    assigned_date = serializers.DateField()
    reason = serializers.CharField(allow_null=True)


class LicenseDetailSerializer(serializers.Serializer):
    """Serializer for LicenseDetailDTO."""

    summary = LicenseSummarySerializer()
    seats = SeatSerializer(many=True)
    assignments = LicenseAssignmentSerializer(many=True)


class SeatKeyRequestSerializer(serializers.Serializer):
    """Serializer for seat key updates. A blank key clears the seat."""

    key = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SeatKeyCheckSerializer(serializers.Serializer):
    """Serializer for SeatKeyCheckDTO."""

    duplicate = serializers.BooleanField()
    license_name = serializers.CharField(allow_null=True)
