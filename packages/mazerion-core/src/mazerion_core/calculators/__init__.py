"""
Built-in calculators.

Importing this package registers every calculator below in the
catalogue; get_default_registry() does so before building the registry.
"""

from mazerion_core.calculators.abv import AbvCalculator
from mazerion_core.calculators.brix_to_sg import BrixToSgCalculator
from mazerion_core.calculators.dilution import DilutionCalculator
from mazerion_core.calculators.gallons_to_bottles import GallonsToBottlesCalculator
from mazerion_core.calculators.racking_losses import RackingLossCalculator
from mazerion_core.calculators.sg_correction import SgCorrectionCalculator

__all__ = [
    "AbvCalculator",
    "BrixToSgCalculator",
    "DilutionCalculator",
    "GallonsToBottlesCalculator",
    "RackingLossCalculator",
    "SgCorrectionCalculator",
]
