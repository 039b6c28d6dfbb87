"""Compliance audit service: templates, audits and audit scoring."""
