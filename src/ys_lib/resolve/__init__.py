# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Resolution of the cluster configuration.

`OptionMapper` turns command-line options into an `OptionOverlay` holding only
the values the user actually specified. `ShipFileValidator` checks that the
files requested to be shipped exist. `Resolver` merges the base configuration,
the session record and the overlay following a strict precedence order.
`ClusterFactory` derives the cluster specification, the cluster ID and the
cluster descriptor from the result.

`SessionFrontend` ties these together for one resolution pass.
"""

from .factory import ClusterDescriptor, ClusterFactory
from .frontend import SessionFrontend, load_base_configuration
from .mapper import Mode, OptionMapper, OptionOverlay
from .resolver import Resolver
from .validator import ShipFileValidator

__all__ = [
    "ClusterDescriptor",
    "ClusterFactory",
    "Mode",
    "OptionMapper",
    "OptionOverlay",
    "Resolver",
    "SessionFrontend",
    "ShipFileValidator",
    "load_base_configuration",
]
