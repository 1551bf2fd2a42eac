"""Configurable fee rates consumed by the pricing evaluator.

A ``RateConfig`` is an immutable snapshot. Settings changes never mutate a
configuration in place; they produce a new one via ``with_updates`` so that
an evaluation always sees a consistent rate set.

All rates are decimal fractions of the subsidy base price (``0.037`` = 3.7%).
They are deliberately unbounded: negative or >100% rates are accepted. Only
non-finite values (NaN, Infinity) are rejected.
"""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from pricepro.domain.errors import RateConfigError
from pricepro.domain.types import ProductTier

DEFAULT_TIER_COMMISSION: Mapping[ProductTier, Decimal] = MappingProxyType({
    ProductTier.LOW_WALL: Decimal("0.02"),
    ProductTier.LOW_CABINET: Decimal("0.03"),
    ProductTier.ORDINARY: Decimal("0.03"),
    ProductTier.MID_RANGE: Decimal("0.04"),
    ProductTier.HIGH_RANGE: Decimal("0.06"),
})

# Scalar rate fields, in the order they are shown to users
RATE_FIELDS: tuple[str, ...] = (
    "subsidy_platform_fee",
    "transaction_service_fee",
    "platform_base_deduction",
    "rebate_framework_fee",
    "reduced_deduction",
    "cps_external_commission",
)


def _coerce_float(v: object) -> object:
    if isinstance(v, float):
        return Decimal(str(v))
    return v


class RateConfig(BaseModel):
    """Immutable set of named fee rates.

    Attributes:
        tier_commission: Commission earned per sale, keyed by product tier.
        subsidy_platform_fee: Platform fee earned on subsidised sales.
        transaction_service_fee: Transaction fee deducted on every order.
        platform_base_deduction: Base deduction on standard listings.
        rebate_framework_fee: Rebate framework fee on standard listings.
        reduced_deduction: Reduced deduction on livestream and CPS channels.
        cps_external_commission: Commission paid out on externally shared CPS sales.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tier_commission: Mapping[ProductTier, Decimal] = Field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_TIER_COMMISSION))
    )
    subsidy_platform_fee: Decimal = Decimal("0.053")
    transaction_service_fee: Decimal = Decimal("0.006")
    platform_base_deduction: Decimal = Decimal("0.037")
    rebate_framework_fee: Decimal = Decimal("0.025")
    reduced_deduction: Decimal = Decimal("0.014")
    cps_external_commission: Decimal = Decimal("0.03")

    @field_validator(*RATE_FIELDS, mode="before")
    @classmethod
    def convert_float_inputs(cls, v: object) -> object:
        """Convert floats through ``str`` so binary noise never reaches the arithmetic."""
        return _coerce_float(v)

    @field_validator("tier_commission", mode="before")
    @classmethod
    def convert_float_commissions(cls, v: object) -> object:
        """Apply the float conversion to each tier commission."""
        if isinstance(v, Mapping):
            return {tier: _coerce_float(rate) for tier, rate in v.items()}
        return v

    @field_validator("tier_commission")
    @classmethod
    def freeze_commissions(cls, v: Mapping[ProductTier, Decimal]) -> Mapping[ProductTier, Decimal]:
        """Store the commissions read-only so a snapshot cannot be edited in place."""
        return MappingProxyType(dict(v))

    @field_serializer("tier_commission")
    def dump_commissions(self, v: Mapping[ProductTier, Decimal]) -> dict[ProductTier, Decimal]:
        return dict(v)

    @model_validator(mode="after")
    def rates_must_be_finite(self) -> "RateConfig":
        """Reject NaN and infinite rates."""
        for name in RATE_FIELDS:
            if not getattr(self, name).is_finite():
                raise ValueError(f"{name} must be a finite number")
        for tier, rate in self.tier_commission.items():
            if not rate.is_finite():
                raise ValueError(f"tier_commission[{tier}] must be a finite number")
        return self

    def commission_for(self, tier: ProductTier) -> Decimal:
        """Return the commission rate for *tier*, or zero if none is configured."""
        return self.tier_commission.get(tier, Decimal("0"))

    def with_updates(self, **changes: Any) -> "RateConfig":
        """Return a new configuration with *changes* applied.

        ``tier_commission`` changes are merged into the existing mapping
        rather than replacing it.

        Raises:
            RateConfigError: If a change names an unknown rate or is not a
                finite number.
        """
        data = self.model_dump()
        tier_changes = changes.pop("tier_commission", None)
        if tier_changes:
            data["tier_commission"] = {**data["tier_commission"], **tier_changes}
        data.update(changes)
        return build_rate_config(data)

    def with_tier_commission(self, tier: ProductTier, rate: Decimal) -> "RateConfig":
        """Return a new configuration with the commission for *tier* replaced."""
        return self.with_updates(tier_commission={tier: rate})


def build_rate_config(data: dict[str, Any]) -> RateConfig:
    """Validate *data* into a ``RateConfig``.

    Args:
        data: Mapping of rate names to values. Missing names take defaults.

    Returns:
        The validated configuration.

    Raises:
        RateConfigError: If validation fails.
    """
    try:
        return RateConfig.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'rates'}: {err['msg']}"
            for err in exc.errors()
        )
        raise RateConfigError(f"Invalid rate configuration: {details}") from exc


DEFAULT_RATE_CONFIG = RateConfig()
