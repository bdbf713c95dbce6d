"""
Projector - renderer-ready arrays for interactive point-cloud views

Architecture:
- core: pure resolvers (positions, colors, scales, labels, polylines)
- config: style constants and YAML overrides
- explorer: controller, loader, matplotlib renderer, CLI
"""

__version__ = "0.1.0"

# Use: from projector.core import DataSet, compute_positions, compute_colors
# Use: from projector.config import DEFAULT_STYLES, load_style_config
# Use: from projector.explorer import Projector, DataSetLoader

__all__ = [
    '__version__',
]
