"""Kiosk Estimator - Presentation layer."""
