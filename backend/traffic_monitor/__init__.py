"""
Traffic Monitor backend.
Serves pre-aggregated vehicle-detection statistics to the dashboard.
"""
__version__ = "0.1.0"
