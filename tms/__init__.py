"""
tms - учёт транспортных заказов (Transport Management System)
"""

__version__ = "0.1.0"
