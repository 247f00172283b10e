"""
Blockstore Ingester Core Module

Process startup sequencing.

Author: Blockstore Ingester Project
License: MIT
"""

from .bootstrap import bootstrap, BootstrapResult, BootstrapState

__all__ = ['bootstrap', 'BootstrapResult', 'BootstrapState']
