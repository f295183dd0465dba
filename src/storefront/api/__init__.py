"""Storefront API package.

Routers live in their area modules and are collected in ``storefront.api.routes``.
"""
