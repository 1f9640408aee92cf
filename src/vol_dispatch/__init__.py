"""
vol-dispatch - run Volatility modules against a memory image in parallel.

Each module listed in the modules file becomes one job. Jobs run as separate
tool processes, at most N at a time, and each writes its CSV output to its own
file. Pressing Enter while a batch runs prints the modules still in flight.
"""

__version__ = "0.1.0"
