"""Helpdesk command-line interface."""
