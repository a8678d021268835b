"""Employee Welfare Tracker package.

This package is organized by feature modules (employees, activities, welfare,
analytics, cache) with a thin Flask controller layer and SOLID
service/repository layers.
"""
