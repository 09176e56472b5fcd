"""Kiosk Estimator - Infrastructure layer."""
