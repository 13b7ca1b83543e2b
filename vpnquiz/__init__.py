"""
VPN recommendation quiz service.

Responsibilities:
- Load and normalize the VPN provider catalog.
- Track the five-step quiz wizard per session.
- Score providers against quiz answers and surface the top matches.
"""
