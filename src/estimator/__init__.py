"""
Kiosk Estimator

Multi-category estimate builder and pricing engine.
"""

__version__ = "1.0.0"
