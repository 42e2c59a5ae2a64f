"""
Lead Assignment Service

Intake backend for agency leads: routes each "get started" submission to
the staff members whose services and skills match it.
"""

__version__ = "0.1.0"
