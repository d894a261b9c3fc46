"""Time Tracker package.

This package is organized by feature modules (entries, sessions, presence,
reports, ...) with plain immutable records, pure calculators and a thin Flask
controller layer on top.
"""
