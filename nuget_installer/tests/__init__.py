# Path: nuget_installer/tests/__init__.py
"""Installer test suite."""
