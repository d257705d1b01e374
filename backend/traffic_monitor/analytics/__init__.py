"""
Analytics module for the Traffic Monitor.
Provides the dashboard aggregations and their API routes.
"""
from .aggregator import Aggregator
from .routes import router

__all__ = ["Aggregator", "router"]
