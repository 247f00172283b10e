"""
Blockstore Ingester

Block storage ingester process: configuration bootstrap, logging and
metrics wiring.

Author: Blockstore Ingester Project
License: MIT
"""

__version__ = "0.1.0"
