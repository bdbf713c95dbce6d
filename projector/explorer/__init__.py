"""Projector explorer: controller, data loader, matplotlib renderer."""

from .loader import DataSetLoader
from .projector import Projector
from .renderer import MatplotlibScatterPlot

__all__ = [
    'DataSetLoader',
    'MatplotlibScatterPlot',
    'Projector',
]
