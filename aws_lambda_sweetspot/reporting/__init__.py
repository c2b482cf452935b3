"""Reporting package for AWS Lambda Sweet Spot."""

from .interactive_dashboards import SweetSpotDashboard, create_sweet_spot_dashboard

__all__ = ["SweetSpotDashboard", "create_sweet_spot_dashboard"]
