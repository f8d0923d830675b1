"""
Racking-loss calculator.

Every racking leaves a share of what is *currently* in the vessel behind
on the lees, so losses compound: after n rackings at rate r the volume is
V × (1 − r)^n. Subtracting n × r of the starting volume instead overstates
the loss, and this calculator reports both figures side by side so the
size of that error is visible.
"""

from dataclasses import dataclass
from decimal import Decimal

from mazerion_core.conversions import convert_volume, quantize
from mazerion_core.exceptions import ValidationError
from mazerion_core.models import CalcInput, CalcResult, Measurement
from mazerion_core.protocols import Calculator
from mazerion_core.registry import register_calculator
from mazerion_core.units import Unit
from mazerion_core.validation import Category

VOLUME_UNIT_NAMES: dict[str, Unit] = {
    "gal": Unit.GALLONS,
    "l": Unit.LITERS,
}
MAX_RACKINGS = 10
DEFAULT_BOTTLE_SIZE_ML = Decimal("750")

HIGH_TOTAL_LOSS_PERCENT = Decimal("25")
HIGH_LOSS_RATE_PERCENT = Decimal("10")
MANY_RACKINGS = 4


@dataclass(frozen=True)
class RackingLossInputs:
    """Typed, range-checked inputs."""

    initial_volume: Decimal
    volume_unit: Unit
    loss_rate_percent: Decimal
    num_rackings: int
    bottle_size_ml: Decimal

    @property
    def initial_liters(self) -> Decimal:
        return convert_volume(self.initial_volume, self.volume_unit, Unit.LITERS)

    @property
    def retained_fraction(self) -> Decimal:
        """Share of the volume that survives one racking."""
        return 1 - self.loss_rate_percent / 100


def compound(initial: Decimal, factor: Decimal, events: int) -> list[Decimal]:
    """
    Volume remaining after each event, by repeated multiplication.

    Returns:
        One entry per event; the last one is the final volume
    """
    remaining = initial
    schedule = []
    for _ in range(events):
        remaining = remaining * factor
        schedule.append(remaining)
    return schedule


@register_calculator
class RackingLossCalculator(Calculator):
    """Volume and bottle count after repeated rackings, compounding vs additive."""

    id = "racking_losses"
    name = "Racking Losses (Compounding)"
    category = Category.UTILITIES.value
    description = (
        "Bottles left after a series of rackings, compounding each loss "
        "on the remaining volume and comparing with the naive additive estimate"
    )

    def _parse(self, calc_input: CalcInput) -> RackingLossInputs:
        initial_volume = calc_input.get_decimal("initial_volume")
        loss_rate = calc_input.get_decimal("loss_rate_percent")
        rackings = calc_input.get_int("num_rackings")
        bottle_size = calc_input.get_decimal("bottle_size_ml", DEFAULT_BOTTLE_SIZE_ML)
        unit_name = (calc_input.get_param("volume_unit") or "").strip().lower() or "gal"

        if unit_name not in VOLUME_UNIT_NAMES:
            raise ValidationError(
                f"volume_unit must be one of: {', '.join(VOLUME_UNIT_NAMES)}"
            )
        if initial_volume <= 0:
            raise ValidationError("Initial volume must be positive")
        if loss_rate < 0:
            raise ValidationError("Loss rate cannot be negative")
        if loss_rate >= 100:
            raise ValidationError("Loss rate must be less than 100%")
        if not 1 <= rackings <= MAX_RACKINGS:
            raise ValidationError(f"Number of rackings must be 1-{MAX_RACKINGS}")
        if bottle_size <= 0:
            raise ValidationError("Bottle size must be positive")

        return RackingLossInputs(
            initial_volume=initial_volume,
            volume_unit=VOLUME_UNIT_NAMES[unit_name],
            loss_rate_percent=loss_rate,
            num_rackings=rackings,
            bottle_size_ml=bottle_size,
        )

    def validate(self, calc_input: CalcInput) -> None:
        self._parse(calc_input)

    def calculate(self, calc_input: CalcInput) -> CalcResult:
        inputs = self._parse(calc_input)

        initial_l = inputs.initial_liters
        schedule = compound(initial_l, inputs.retained_fraction, inputs.num_rackings)
        final_l = schedule[-1]

        additive_l = initial_l * (1 - inputs.num_rackings * inputs.loss_rate_percent / 100)
        additive_l = max(additive_l, Decimal(0))

        bottles = final_l * 1000 / inputs.bottle_size_ml
        additive_bottles = additive_l * 1000 / inputs.bottle_size_ml
        total_loss_l = initial_l - final_l
        total_loss_pct = total_loss_l / initial_l * 100

        result = CalcResult(output=Measurement.count(quantize(bottles, 2)))

        initial_text = f"{quantize(inputs.initial_volume, 2)} {inputs.volume_unit.symbol}"
        if inputs.volume_unit != Unit.LITERS:
            initial_text += f" ({quantize(initial_l, 2)} L)"

        result = (
            result.with_meta("Initial Volume", initial_text)
            .with_meta("Loss Per Racking", f"{quantize(inputs.loss_rate_percent, 2)}%")
            .with_meta("Rackings", inputs.num_rackings)
            .with_meta("Bottle Size", f"{inputs.bottle_size_ml} mL")
            .with_spacer()
            .with_meta("── Volume After Each Racking ──", "")
        )
        for racking, remaining in enumerate(schedule, start=1):
            lost_pct = (initial_l - remaining) / initial_l * 100
            result = result.with_meta(
                f"Racking {racking}",
                f"{quantize(remaining, 2)} L ({quantize(lost_pct, 2)}% lost)",
            )

        result = (
            result.with_spacer()
            .with_meta("── Compounding vs Additive ──", "")
            .with_meta("Final Volume", f"{quantize(final_l, 2)} L")
            .with_meta(
                "Total Loss",
                f"{quantize(total_loss_l, 2)} L ({quantize(total_loss_pct, 2)}%)",
            )
            .with_meta("Correct (Compounding)", quantize(bottles, 2))
            .with_meta("Wrong (Additive)", quantize(additive_bottles, 2))
            .with_meta(
                "Additive Error",
                f"{quantize(bottles - additive_bottles, 2)} bottles",
            )
            .with_meta("Formula", "V × (1 − r)^n, one racking at a time")
        )

        if total_loss_pct > HIGH_TOTAL_LOSS_PERCENT:
            result = result.with_warning(
                f"High total loss ({quantize(total_loss_pct, 1)}%) - "
                "consider fewer rackings or a different vessel"
            )
        if inputs.loss_rate_percent > HIGH_LOSS_RATE_PERCENT:
            result = result.with_warning(
                f"Loss rate above {HIGH_LOSS_RATE_PERCENT}% per racking is unusually high"
            )
        if inputs.num_rackings > MANY_RACKINGS:
            result = result.with_warning("Many rackings - ensure benefits outweigh losses")

        return result
