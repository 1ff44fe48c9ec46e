"""
shiptrack - UPS shipment tracking client.
"""

__version__ = "1.0.0"
