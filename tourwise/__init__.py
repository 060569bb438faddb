"""TourWise routing engine: pure computation over tours, stops and venues.

Entry points live in ``tourwise.engine``.
"""

__version__ = "0.1.0"
