"""Decompose subpackage."""

from benchmark_zx.decompose.decomposer import Decomposer, split_components
from benchmark_zx.decompose.drivers import (
    BssTOnlyDriver,
    BssWithCatsDriver,
    Driver,
    DynamicTDriver,
    Step,
    TOnlyDriver,
    driver_from_name,
)

__all__ = [
    "BssTOnlyDriver",
    "BssWithCatsDriver",
    "Decomposer",
    "Driver",
    "DynamicTDriver",
    "Step",
    "TOnlyDriver",
    "driver_from_name",
    "split_components",
]
