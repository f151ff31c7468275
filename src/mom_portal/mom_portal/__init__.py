"""MoM portal package.

Meeting management backend organized by feature modules (staff, meetings,
members, documents, dashboard, ...) with a thin Flask controller layer on top
of service/repository layers.
"""
