"""Static reference tables for the routing engine."""
