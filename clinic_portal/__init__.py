"""
Clinic Portal

A FastAPI-based web portal for the clinic scheduling system, with
role-based dashboards for admins, doctors and patients backed by the
clinic REST API.
"""

__version__ = "1.0.0"
