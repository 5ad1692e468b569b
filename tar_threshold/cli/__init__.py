"""
Command-line interface for TAR threshold estimation.
"""
from .app import app, main, format_summary

__all__ = ['app', 'main', 'format_summary']
