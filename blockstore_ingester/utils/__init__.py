"""
Blockstore Ingester Utilities

Author: Blockstore Ingester Project
License: MIT
"""
