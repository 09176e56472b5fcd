"""Kiosk Estimator - Domain layer."""
